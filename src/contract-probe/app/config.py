import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_CONTRACT_ADDRESS = "0xfB597d6Fa6C08f5434e6eCf69114497343aE13Dd"

# Interchangeable mirrors of one chain, tried in this order.
DEFAULT_RPC_URLS = [
    "https://api.roninchain.com/rpc",
    "https://api.roninchain.com/eth",
    "https://api-gateway.skymavis.com/rpc",
]


@dataclass
class Config:
    rpc_urls: List[str] = field(default_factory=lambda: list(DEFAULT_RPC_URLS))
    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    request_timeout: float = 10
    probe_concurrency: int = 1
    native_symbol: str = "RON"
    log_level: str = "INFO"


def _split_urls(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_config() -> Config:
    """Load configuration from environment variables."""
    rpc_env = os.getenv("RPC_URLS")
    rpc_urls = _split_urls(rpc_env) if rpc_env is not None else list(DEFAULT_RPC_URLS)
    if not rpc_urls:
        raise ValueError("RPC_URLS is set but contains no endpoint URLs.")

    contract_address = os.getenv("CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS).strip()

    try:
        timeout = float(os.getenv("REQUEST_TIMEOUT", "10"))
        concurrency = int(os.getenv("PROBE_CONCURRENCY", "1"))
    except ValueError as exc:
        raise ValueError(f"Invalid numeric setting: {exc}") from exc

    if timeout <= 0:
        raise ValueError("REQUEST_TIMEOUT must be positive.")
    if concurrency < 1:
        raise ValueError("PROBE_CONCURRENCY must be at least 1.")

    return Config(
        rpc_urls=rpc_urls,
        contract_address=contract_address,
        request_timeout=timeout,
        probe_concurrency=concurrency,
        native_symbol=os.getenv("NATIVE_SYMBOL", "RON").strip() or "RON",
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
