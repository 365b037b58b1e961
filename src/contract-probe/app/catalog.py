"""
Candidate function selectors probed against contracts without an ABI.
- Selectors are stored literally; the catalog is append-only, so new
  candidates go at the end and existing entries never change meaning.
- function_selector() hashes arbitrary signatures for the dynamic call path.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from eth_utils import keccak


@dataclass(frozen=True)
class SelectorEntry:
    signature: str
    selector: str


SELECTOR_CATALOG: Tuple[SelectorEntry, ...] = (
    # Token metadata
    SelectorEntry("name()", "0x06fdde03"),
    SelectorEntry("symbol()", "0x95d89b41"),
    SelectorEntry("totalSupply()", "0x18160ddd"),
    SelectorEntry("decimals()", "0x313ce567"),
    # Ownership / admin
    SelectorEntry("owner()", "0x8da5cb5b"),
    SelectorEntry("getOwner()", "0x893d20e8"),
    SelectorEntry("paused()", "0x5c975abb"),
    # Staking
    SelectorEntry("getTotalStakers()", "0x5ea4fa3f"),
    SelectorEntry("totalStakers()", "0x2a7401c8"),
    SelectorEntry("stakerCount()", "0x158626f7"),
    SelectorEntry("getStakers()", "0x43adbcef"),
    SelectorEntry("getAllStakers()", "0x4a393149"),
    SelectorEntry("getStakerList()", "0xf7793ad2"),
    SelectorEntry("getStakedTokens(address)", "0x171e631c"),
    SelectorEntry("totalStaked()", "0x817b1cd2"),
    SelectorEntry("getStakingInfo()", "0x8f0cb5de"),
    SelectorEntry("stakingEnabled()", "0x0cefb5de"),
    SelectorEntry("getStakingBalance(address)", "0x14afd79e"),
)


def as_mapping(catalog: Iterable[SelectorEntry] = SELECTOR_CATALOG) -> Dict[str, str]:
    """signature -> selector, in catalog order."""
    return {entry.signature: entry.selector for entry in catalog}


def function_selector(signature: str) -> str:
    """First 4 bytes of keccak-256 over the signature text, 0x-prefixed."""
    if not isinstance(signature, str) or not signature.strip():
        raise ValueError("Function signature must be a non-empty string.")
    return "0x" + keccak(text=signature.strip())[:4].hex()
