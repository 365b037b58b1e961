from typing import Any, Callable, Dict, List, Optional, Tuple
from unittest.mock import Mock

import pytest

from app.errors import RpcProtocolError


CONTRACT = "0xfb597d6fa6c08f5434e6ecf69114497343ae13dd"


class FakeRpcClient:
    """
    Stands in for RpcClient.
    - `live` maps endpoint -> block number, or an exception to raise on liveness.
    - `handler(endpoint, method, params)` answers every other call.
    """

    def __init__(
        self,
        live: Optional[Dict[str, Any]] = None,
        handler: Optional[Callable[[str, str, List[Any]], Any]] = None,
    ) -> None:
        self.live = dict(live or {})
        self.handler = handler
        self.calls: List[Tuple[str, str, List[Any]]] = []
        self.liveness_checks: List[str] = []

    def get_block_number(self, endpoint: str) -> int:
        self.liveness_checks.append(endpoint)
        outcome = self.live.get(endpoint, RpcProtocolError("unknown endpoint"))
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def call(self, endpoint: str, method: str, params: Optional[List[Any]] = None) -> Any:
        params = params or []
        self.calls.append((endpoint, method, params))
        if self.handler is None:
            raise RpcProtocolError("no handler")
        return self.handler(endpoint, method, params)


@pytest.fixture
def make_response() -> Callable[..., Mock]:
    def _make(status_code: int = 200, payload: Any = None, reason: str = "OK") -> Mock:
        response = Mock()
        response.status_code = status_code
        response.reason = reason
        response.json.return_value = payload
        return response

    return _make
