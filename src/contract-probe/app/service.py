import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .catalog import SELECTOR_CATALOG, as_mapping
from .config import Config
from .decoder import decode_result
from .endpoints import EndpointCache, EndpointSelector
from .errors import NotAContractError
from .prober import ContractProber, normalize_address
from .rpc_client import RpcClient

logger = logging.getLogger(__name__)


class ProbeService:
    """Combine configuration, endpoint failover, and the prober to serve reports."""

    def __init__(self, config: Config, client: Optional[RpcClient] = None) -> None:
        self.config = config
        self.client = client or RpcClient(timeout=config.request_timeout)
        self.endpoint_cache = EndpointCache()
        self.selector = EndpointSelector(config.rpc_urls, self.client, self.endpoint_cache)
        self.prober = ContractProber(self.client, max_workers=config.probe_concurrency)
        self.catalog = SELECTOR_CATALOG

    def _target(self, address: Optional[str]) -> str:
        return normalize_address(address or self.config.contract_address)

    def resolve_endpoint(self) -> Dict[str, Any]:
        endpoint, block_number = self.selector.resolve()
        return {"endpoint": endpoint, "block_number": block_number}

    def get_contract_info(self, address: Optional[str] = None) -> Dict[str, Any]:
        target = self._target(address)
        endpoint = self.selector.resolve_endpoint()
        return self.prober.probe(endpoint, target).to_dict()

    def probe_methods(self, address: Optional[str] = None) -> List[Dict[str, Any]]:
        target = self._target(address)
        endpoint = self.selector.resolve_endpoint()
        results = self.prober.probe_all_methods(endpoint, target, self.catalog)
        return [r.to_dict() for r in results]

    def call_method(
        self,
        signature: str,
        params: Optional[List[Any]] = None,
        address: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not signature or not signature.strip():
            raise ValueError("Method is required.")
        target = self._target(address)
        endpoint = self.selector.resolve_endpoint()
        return self.prober.call_with_computed_selector(endpoint, target, signature, params).to_dict()

    def inspect(self, address: Optional[str] = None) -> Dict[str, Any]:
        """Full report: account info plus every catalog probe, or NotAContractError."""
        target = self._target(address)
        endpoint = self.selector.resolve_endpoint()
        logger.info("Checking contract", extra={"address": target, "endpoint": endpoint})

        info = self.prober.probe(endpoint, target)
        if not info.is_contract:
            raise NotAContractError(target)

        results = self.prober.probe_all_methods(endpoint, target, self.catalog)
        methods = [r.to_dict() for r in results]
        return {
            "endpoint": endpoint,
            "native_symbol": self.config.native_symbol,
            "contract": info.to_dict(),
            "methods": methods,
            "working_methods": [m for m in methods if m["success"]],
        }

    def list_catalog(self) -> Dict[str, str]:
        """Candidate signatures and their selectors, in probing order."""
        return as_mapping(self.catalog)

    def decode(self, raw: Optional[str]) -> Dict[str, Any]:
        decoded = decode_result(raw)
        return {"raw": raw, "kind": decoded.kind, "decoded": decoded.value}

    def health(self) -> Dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
