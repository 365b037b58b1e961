"""
Heuristic rendering of raw eth_call return data when no ABI is known.

Rules, in precedence order:
  1. missing or "0x"                       -> "Empty result"
  2. one 32-byte word with 12 zero bytes    -> address (trailing 20 bytes)
  3. one 32-byte word                       -> unsigned integer, decimal
  4. anything else                          -> raw hex, unchanged

Rule 2 wins over rule 3, so integers below 2**160 render as addresses.
Rules 2 and 3 only apply when all 64 digits are hex; other words fall to rule 4.
"""

import re
from dataclasses import dataclass
from typing import Optional

EMPTY_RESULT = "Empty result"
WORD_HEX_LENGTH = 66
ADDRESS_PADDING = "0" * 24

KIND_EMPTY = "empty"
KIND_ADDRESS = "address"
KIND_UINT = "uint256"
KIND_HEX = "hex"

_HEX_BODY = re.compile(r"^[0-9a-fA-F]*$")

_LABELS = {
    KIND_ADDRESS: "Address",
    KIND_UINT: "Number",
    KIND_HEX: "Hex",
}


@dataclass(frozen=True)
class DecodedValue:
    kind: str
    value: str

    def label(self) -> str:
        if self.kind == KIND_EMPTY:
            return self.value
        return f"{_LABELS[self.kind]}: {self.value}"


def decode_result(raw: Optional[str]) -> DecodedValue:
    if not raw or raw == "0x":
        return DecodedValue(KIND_EMPTY, EMPTY_RESULT)
    if not isinstance(raw, str):
        return DecodedValue(KIND_HEX, str(raw))

    if len(raw) == WORD_HEX_LENGTH and raw.startswith("0x") and _HEX_BODY.match(raw[2:]):
        if raw[2:26] == ADDRESS_PADDING:
            return DecodedValue(KIND_ADDRESS, "0x" + raw[26:])
        return DecodedValue(KIND_UINT, str(int(raw, 16)))

    return DecodedValue(KIND_HEX, raw)


def decode(raw: Optional[str]) -> str:
    return decode_result(raw).value
