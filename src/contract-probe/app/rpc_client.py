import itertools
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from .errors import RpcProtocolError, RpcTransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10

# Shared by every client so ids stay unique within the process.
_request_ids = itertools.count(1)


@dataclass(frozen=True)
class RpcResponse:
    """Either a JSON-RPC result or the server's error object, never both."""

    result: Any = None
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def parse(cls, data: Any) -> "RpcResponse":
        if not isinstance(data, dict):
            raise RpcTransportError("Unexpected JSON-RPC response (non-object).")

        error_obj = data.get("error")
        if error_obj is not None:
            if not isinstance(error_obj, dict):
                error_obj = {"message": str(error_obj)}
            return cls(error=error_obj)

        if "result" not in data:
            raise RpcTransportError("Unexpected JSON-RPC response (missing result).")
        return cls(result=data["result"])

    def unwrap(self) -> Any:
        if self.error is None:
            return self.result
        message = self.error.get("message")
        if not message:
            message = json.dumps(self.error, sort_keys=True, default=str)
        code = self.error.get("code")
        raise RpcProtocolError(str(message), code=code if isinstance(code, int) else None)


class RpcClient:
    """Minimal JSON-RPC 2.0 client for EVM nodes (HTTP POST).

    One client can talk to any number of endpoints; the endpoint is passed per
    call. No retries happen here, failover belongs to the endpoint selector.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive.")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        if headers:
            self.session.headers.update(dict(headers))

    def call(self, endpoint: str, method: str, params: Optional[List[Any]] = None) -> Any:
        url = (endpoint or "").strip()
        if not url:
            raise ValueError("endpoint must be a non-empty string.")
        if not isinstance(method, str) or not method.strip():
            raise ValueError("method must be a non-empty string.")
        if params is None:
            params = []
        if not isinstance(params, list):
            raise ValueError("params must be a list.")

        payload = {
            "jsonrpc": "2.0",
            "id": next(_request_ids),
            "method": method,
            "params": params,
        }
        logger.debug("rpc request", extra={"endpoint": url, "method": method})

        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.Timeout as exc:
            raise RpcTransportError(
                f"Request to {url} timed out after {self.timeout}s.",
                cause=exc,
                timed_out=True,
            ) from exc
        except requests.RequestException as exc:
            raise RpcTransportError(f"Request to {url} failed: {exc}", cause=exc) from exc

        if not 200 <= response.status_code < 300:
            raise RpcTransportError.from_status(response.status_code, response.reason or "")

        try:
            data = response.json()
        except ValueError as exc:
            raise RpcTransportError(f"Invalid JSON from {url}.", cause=exc) from exc

        return RpcResponse.parse(data).unwrap()

    def get_block_number(self, endpoint: str) -> int:
        result = self.call(endpoint, "eth_blockNumber", [])
        if not isinstance(result, str) or not result.startswith("0x"):
            raise RpcProtocolError("eth_blockNumber returned unexpected result.")
        return int(result, 16)
