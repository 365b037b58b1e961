import argparse
import json
import sys
from typing import Any, Dict, Optional

from .config import load_config
from .decoder import decode_result
from .logging_config import configure_logging
from .service import ProbeService


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Probe a contract over JSON-RPC without an ABI.",
        allow_abbrev=False,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("endpoint", help="Find a responsive RPC endpoint")

    info_parser = subparsers.add_parser("info", help="Fetch code size, balance and nonce")
    info_parser.add_argument(
        "--address",
        required=False,
        help="Contract address (0x-prefixed). Defaults to CONTRACT_ADDRESS env.",
    )

    methods_parser = subparsers.add_parser("methods", help="Try every catalog selector")
    methods_parser.add_argument(
        "--address",
        required=False,
        help="Contract address (0x-prefixed). Defaults to CONTRACT_ADDRESS env.",
    )

    call_parser = subparsers.add_parser("call", help="Call a function by signature")
    call_parser.add_argument(
        "--method",
        required=True,
        help="Function signature, e.g. balanceOf(address).",
    )
    call_parser.add_argument(
        "--param",
        action="append",
        default=[],
        help="Single address or uint argument.",
    )
    call_parser.add_argument(
        "--address",
        required=False,
        help="Contract address (0x-prefixed). Defaults to CONTRACT_ADDRESS env.",
    )

    inspect_parser = subparsers.add_parser("inspect", help="Contract info plus every catalog probe")
    inspect_parser.add_argument(
        "--address",
        required=False,
        help="Contract address (0x-prefixed). Defaults to CONTRACT_ADDRESS env.",
    )
    inspect_parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a readable summary instead of JSON.",
    )

    subparsers.add_parser("catalog", help="List the candidate selectors that get probed")

    decode_parser = subparsers.add_parser("decode", help="Decode a raw hex return value")
    decode_parser.add_argument("--value", required=True, help="0x-prefixed hex string.")

    return parser


def format_summary(report: Dict[str, Any]) -> str:
    contract = report["contract"]
    lines = [
        f"Using RPC endpoint: {report['endpoint']}",
        "",
        "=== Basic Contract Info ===",
        f"Contract: {contract['address']}",
        f"Bytecode Size: {contract['bytecode_size']} bytes",
        f"Balance: {contract['balance']} {report['native_symbol']}",
        f"Transaction Count: {contract['transaction_count']}",
        "",
        "=== Summary of Working Methods ===",
    ]
    working = report["working_methods"]
    if not working:
        lines.append("No working methods found.")
    for method in working:
        lines.append(f"{method['name']} - {decode_result(method['result']).label()}")
    return "\n".join(lines)


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
        configure_logging(config.log_level)
        service = ProbeService(config)

        if args.command == "endpoint":
            result: Any = service.resolve_endpoint()
        elif args.command == "info":
            result = service.get_contract_info(args.address)
        elif args.command == "methods":
            result = service.probe_methods(args.address)
        elif args.command == "call":
            result = service.call_method(args.method, args.param, args.address)
        elif args.command == "catalog":
            result = service.list_catalog()
        elif args.command == "inspect":
            result = service.inspect(args.address)
            if args.summary:
                print(format_summary(result))
                return
        else:
            result = service.decode(args.value)
        print(json.dumps(result, indent=2))
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
