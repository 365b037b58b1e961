"""
MCP server exposing ABI-less contract probing over JSON-RPC.
"""

import argparse
from collections.abc import Mapping
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP

from .config import load_config
from .logging_config import configure_logging
from .service import ProbeService

server = FastMCP(
    name="contract-probe",
    instructions="Discover which common function selectors a contract answers, without an ABI.",
)

_service: Optional[ProbeService] = None


def _get_service() -> ProbeService:
    global _service
    if _service is None:
        cfg = load_config()
        configure_logging(cfg.log_level)
        _service = ProbeService(cfg)
    return _service


def _normalize_params(value: Optional[Any]) -> Optional[list]:
    """
    Ensure `params` is treated as an array:
    - list/tuple: keep as list
    - Mapping: reject (not an array)
    - other scalars (including a lone address string): wrap into a list
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        raise ValueError("params must be an array, not an object/map.")
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@server.tool(
    name="health",
    title="Health Check",
    description="Report that the server is up.",
)
def health() -> dict:
    return _get_service().health()


@server.tool(
    name="resolve_endpoint",
    title="Resolve RPC Endpoint",
    description="Return the first responsive RPC endpoint (cached between calls) and its latest block.",
)
def resolve_endpoint() -> dict:
    return _get_service().resolve_endpoint()


@server.tool(
    name="get_contract_info",
    title="Get Contract Info",
    description="Bytecode size, native balance and transaction count. Address defaults to the configured contract.",
)
def get_contract_info(address: Optional[str] = None) -> dict:
    return _get_service().get_contract_info(address)


@server.tool(
    name="probe_methods",
    title="Probe Common Methods",
    description="eth_call every selector in the built-in catalog and heuristically decode each result.",
)
def probe_methods(address: Optional[str] = None) -> list:
    return _get_service().probe_methods(address)


@server.tool(
    name="call_method",
    title="Call Method By Signature",
    description="Compute the selector of `method` and eth_call it. Supports no argument or a single address/uint argument.",
)
def call_method(method: str, params: Optional[Any] = None, address: Optional[str] = None) -> dict:
    return _get_service().call_method(method, _normalize_params(params), address)


@server.tool(
    name="inspect_contract",
    title="Inspect Contract",
    description="Contract info plus every catalog probe. Fails if the address has no code.",
)
def inspect_contract(address: Optional[str] = None) -> dict:
    return _get_service().inspect(address)


@server.tool(
    name="list_selectors",
    title="List Candidate Selectors",
    description="Signature -> selector map probed by probe_methods, in probing order.",
)
def list_selectors() -> dict:
    return _get_service().list_catalog()


@server.tool(
    name="decode_result",
    title="Decode Raw Result",
    description="Classify a raw hex return value as empty, address, uint256 or opaque hex.",
)
def decode_result(value: Optional[str] = None) -> dict:
    return _get_service().decode(value)


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the contract-probe MCP server.")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol for MCP.",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for SSE/HTTP transports.",
    )
    parser.add_argument(
        "--mount-path",
        default="/",
        help="Mount path for SSE transport (only when transport=sse).",
    )
    args = parser.parse_args()

    # FastMCP uses host/port only for SSE/HTTP transports; stdio ignores them.
    server.settings.host = args.host
    server.settings.port = args.port

    if args.transport == "sse":
        server.run(transport="sse", mount_path=args.mount_path)
    else:
        server.run(transport=args.transport)


if __name__ == "__main__":
    main()
