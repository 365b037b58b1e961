from typing import Dict, Optional


class ProbeError(Exception):
    """Base class for contract-probe failures."""


class RpcTransportError(ProbeError):
    """Network or HTTP level failure talking to a JSON-RPC endpoint."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
        cause: Optional[BaseException] = None,
        timed_out: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.status_text = status_text
        self.cause = cause
        self.timed_out = timed_out

    @classmethod
    def from_status(cls, status_code: int, status_text: str) -> "RpcTransportError":
        return cls(
            f"HTTP Error: {status_code} - {status_text}",
            status_code=status_code,
            status_text=status_text,
        )


class RpcProtocolError(ProbeError):
    """The endpoint answered with a JSON-RPC error object."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(f"RPC Error: {message}")
        self.rpc_message = message
        self.code = code


class NoEndpointAvailable(ProbeError):
    """Every candidate endpoint failed its liveness probe."""

    def __init__(self, failures: Dict[str, str]) -> None:
        self.failures = dict(failures)
        if failures:
            detail = "; ".join(f"{url}: {reason}" for url, reason in failures.items())
        else:
            detail = "no candidate endpoints configured"
        super().__init__(f"Could not connect to any RPC endpoint ({detail}).")


class UnsupportedParameterShape(ProbeError):
    """The dynamic call path cannot encode the given parameters."""


class NotAContractError(ProbeError):
    def __init__(self, address: str) -> None:
        super().__init__(f"{address} is not a contract")
        self.address = address
