import logging
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import NoEndpointAvailable, ProbeError
from .rpc_client import RpcClient

logger = logging.getLogger(__name__)


class EndpointCache:
    """Holds the one endpoint currently trusted to answer, if any."""

    def __init__(self) -> None:
        self._endpoint: Optional[str] = None
        self.lock = threading.RLock()

    def get(self) -> Optional[str]:
        return self._endpoint

    def set(self, endpoint: str) -> None:
        self._endpoint = endpoint

    def clear(self) -> None:
        self._endpoint = None


class EndpointSelector:
    """
    Picks a responsive endpoint from a prioritized list of mirrors.
    - Re-validates the cached endpoint with eth_blockNumber before reuse.
    - Falls back to the candidates in declared order when it stops answering.
    """

    def __init__(
        self,
        candidates: Sequence[str],
        client: RpcClient,
        cache: Optional[EndpointCache] = None,
    ) -> None:
        urls = [c.strip() for c in candidates if c and c.strip()]
        if not urls:
            raise ValueError("At least one RPC endpoint is required.")
        self.candidates: List[str] = urls
        self.client = client
        self.cache = cache or EndpointCache()

    def _check(self, endpoint: str) -> int:
        return self.client.get_block_number(endpoint)

    def resolve_endpoint(self) -> str:
        return self.resolve()[0]

    def resolve(self) -> Tuple[str, int]:
        """Returns the live endpoint and the block number its liveness check saw."""
        with self.cache.lock:
            cached = self.cache.get()
            if cached:
                try:
                    block_number = self._check(cached)
                    return cached, block_number
                except (ProbeError, ValueError) as exc:
                    logger.warning(
                        "Previously working RPC endpoint is no longer working",
                        extra={"endpoint": cached, "error_reason": str(exc)},
                    )
                    self.cache.clear()

            failures: Dict[str, str] = {}
            for url in self.candidates:
                logger.info("Testing RPC endpoint", extra={"endpoint": url})
                try:
                    block_number = self._check(url)
                except (ProbeError, ValueError) as exc:
                    logger.info(
                        "Failed to connect to RPC endpoint",
                        extra={"endpoint": url, "error_reason": str(exc)},
                    )
                    failures[url] = str(exc)
                    continue
                logger.info(
                    "RPC endpoint is live",
                    extra={"endpoint": url, "block_number": block_number},
                )
                self.cache.set(url)
                return url, block_number

            raise NoEndpointAvailable(failures)
