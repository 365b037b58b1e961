import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .catalog import SELECTOR_CATALOG, SelectorEntry, function_selector
from .decoder import decode
from .errors import ProbeError, UnsupportedParameterShape
from .rpc_client import RpcClient

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")
QUANTITY_PATTERN = re.compile(r"^0x[0-9a-fA-F]+$")
BLOCK_TAG = "latest"
WEI_PER_UNIT = 10**18


@dataclass(frozen=True)
class ContractInfo:
    address: str
    is_contract: bool
    bytecode_size: int
    balance: float
    transaction_count: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProbeResult:
    name: str
    success: bool
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def decoded(self) -> Optional[str]:
        if not self.success:
            return None
        return decode(self.result)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "success": self.success}
        if self.success:
            out["result"] = self.result
            out["decoded"] = self.decoded
        else:
            out["error"] = self.error
        return out


@dataclass(frozen=True)
class CallResult:
    method: str
    selector: str
    data: str
    result: Optional[str]

    @property
    def decoded(self) -> str:
        return decode(self.result)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "method": self.method,
            "selector": self.selector,
            "data": self.data,
            "result": self.result,
            "decoded": self.decoded,
        }


def normalize_address(address: str) -> str:
    if not isinstance(address, str):
        raise ValueError("Address must be a string.")

    candidate = address.strip()
    if not candidate.startswith("0x"):
        candidate = f"0x{candidate}"

    if not ADDRESS_PATTERN.match(candidate):
        raise ValueError("Invalid address format. Expected 0x-prefixed 40 hex characters.")

    return candidate.lower()


def bytecode_size(code: str) -> int:
    if not isinstance(code, str) or not code.startswith("0x") or len(code) % 2 != 0:
        raise ProbeError(f"eth_getCode returned malformed bytecode: {code!r}")
    return (len(code) - 2) // 2


def parse_quantity(value: Any, method: str) -> int:
    if not isinstance(value, str) or not QUANTITY_PATTERN.match(value):
        raise ProbeError(f"{method} returned malformed quantity: {value!r}")
    return int(value, 16)


def wei_to_native(raw_balance: str) -> float:
    return parse_quantity(raw_balance, "eth_getBalance") / WEI_PER_UNIT


def parse_function_signature(signature: str) -> Tuple[str, List[str]]:
    text = (signature or "").strip()
    if "(" not in text or not text.endswith(")"):
        raise ValueError("function must be in the form name(type1,type2,...)")
    name, rest = text.split("(", 1)
    fn = name.strip()
    if not fn or not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", fn):
        raise ValueError("Invalid function name.")
    params = rest[:-1]
    types = [t.strip() for t in params.split(",")] if params.strip() else []
    for t in types:
        if not t:
            raise ValueError("Empty type in function signature.")
    return fn, types


def _uint_bits(typ: str) -> Optional[int]:
    match = re.fullmatch(r"uint(\d*)", typ)
    if not match:
        return None
    bits = int(match.group(1) or 256)
    if bits <= 0 or bits > 256 or bits % 8 != 0:
        return None
    return bits


def _canonical_type(typ: str) -> str:
    return "uint256" if typ == "uint" else typ


def encode_single_param(typ: str, value: Any) -> str:
    """Left-pad a single address or uint argument to one 32-byte word."""
    if typ == "address":
        if not isinstance(value, str) or not ADDRESS_PATTERN.match(value.strip()):
            raise UnsupportedParameterShape("address parameter must be 0x-prefixed 40 hex characters.")
        return value.strip()[2:].lower().rjust(64, "0")

    bits = _uint_bits(typ)
    if bits is None:
        raise UnsupportedParameterShape(
            f"Unsupported parameter type '{typ}'. Only a single address or uint parameter is supported."
        )

    if isinstance(value, bool):
        raise UnsupportedParameterShape("uint parameter must be an integer, not a bool.")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            number = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
        except ValueError as exc:
            raise UnsupportedParameterShape(f"uint parameter is not a number: {value!r}") from exc
    else:
        raise UnsupportedParameterShape("uint parameter must be an integer or numeric string.")

    if number < 0 or number >= 2**bits:
        raise UnsupportedParameterShape(f"uint{bits} parameter out of range.")
    return format(number, "x").rjust(64, "0")


def build_call_data(signature: str, params: Optional[Sequence[Any]] = None) -> Tuple[str, str, str]:
    """Returns (canonical signature, selector, call data)."""
    fn, types = parse_function_signature(signature)
    args = list(params or [])
    if len(types) > 1:
        raise UnsupportedParameterShape("Only functions with at most one parameter are supported.")
    if len(args) != len(types):
        raise UnsupportedParameterShape(
            f"Argument count mismatch: expected {len(types)}, got {len(args)}."
        )

    canonical = f"{fn}({','.join(_canonical_type(t) for t in types)})"
    selector = function_selector(canonical)
    data = selector
    if types:
        data += encode_single_param(types[0], args[0])
    return canonical, selector, data


class ContractProber:
    """Read-only calls against one contract: account state and catalog probes."""

    def __init__(self, client: RpcClient, max_workers: int = 1) -> None:
        self.client = client
        self.max_workers = max(1, int(max_workers))

    def probe(self, endpoint: str, address: str) -> ContractInfo:
        target = normalize_address(address)
        code = self.client.call(endpoint, "eth_getCode", [target, BLOCK_TAG])
        balance = self.client.call(endpoint, "eth_getBalance", [target, BLOCK_TAG])
        tx_count = self.client.call(endpoint, "eth_getTransactionCount", [target, BLOCK_TAG])

        return ContractInfo(
            address=target,
            is_contract=code != "0x",
            bytecode_size=bytecode_size(code),
            balance=wei_to_native(balance),
            transaction_count=parse_quantity(tx_count, "eth_getTransactionCount"),
        )

    def try_method(self, endpoint: str, address: str, entry: SelectorEntry) -> ProbeResult:
        try:
            result = self.client.call(
                endpoint,
                "eth_call",
                [{"to": address, "data": entry.selector}, BLOCK_TAG],
            )
        except ProbeError as exc:
            logger.debug("method failed", extra={"method": entry.signature, "error_reason": str(exc)})
            return ProbeResult(name=entry.signature, success=False, error=str(exc))

        logger.debug("method answered", extra={"method": entry.signature})
        return ProbeResult(name=entry.signature, success=True, result=result)

    def probe_all_methods(
        self,
        endpoint: str,
        address: str,
        catalog: Iterable[SelectorEntry] = SELECTOR_CATALOG,
    ) -> List[ProbeResult]:
        target = normalize_address(address)
        entries = list(catalog)

        if self.max_workers == 1 or len(entries) <= 1:
            return [self.try_method(endpoint, target, entry) for entry in entries]

        # map() yields in submission order, which is catalog order.
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(entries))) as pool:
            return list(pool.map(lambda entry: self.try_method(endpoint, target, entry), entries))

    def call_with_computed_selector(
        self,
        endpoint: str,
        address: str,
        signature: str,
        params: Optional[Sequence[Any]] = None,
    ) -> CallResult:
        target = normalize_address(address)
        canonical, selector, data = build_call_data(signature, params)
        result = self.client.call(endpoint, "eth_call", [{"to": target, "data": data}, BLOCK_TAG])
        return CallResult(method=canonical, selector=selector, data=data, result=result)
