import pytest

from app.catalog import SELECTOR_CATALOG, SelectorEntry, as_mapping, function_selector


class TestCatalog:
    def test_entries_are_well_formed(self):
        for entry in SELECTOR_CATALOG:
            assert entry.signature.endswith(")")
            assert entry.selector.startswith("0x")
            assert len(entry.selector) == 10
            int(entry.selector, 16)

    def test_signatures_are_unique(self):
        signatures = [e.signature for e in SELECTOR_CATALOG]
        assert len(signatures) == len(set(signatures))

    def test_mapping_keeps_order(self):
        mapping = as_mapping()
        assert list(mapping) == [e.signature for e in SELECTOR_CATALOG]
        assert mapping["totalSupply()"] == "0x18160ddd"
        assert mapping["owner()"] == "0x8da5cb5b"

    def test_entries_are_immutable(self):
        entry = SELECTOR_CATALOG[0]
        with pytest.raises(AttributeError):
            entry.selector = "0x00000000"

    def test_token_selectors_match_their_hash(self):
        for signature in ("name()", "symbol()", "totalSupply()", "decimals()", "owner()", "paused()"):
            assert as_mapping()[signature] == function_selector(signature)


class TestFunctionSelector:
    def test_known_selectors(self):
        assert function_selector("totalSupply()") == "0x18160ddd"
        assert function_selector("balanceOf(address)") == "0x70a08231"
        assert function_selector("  transfer(address,uint256) ") == "0xa9059cbb"

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            function_selector("   ")

    def test_custom_entry(self):
        entry = SelectorEntry("balanceOf(address)", function_selector("balanceOf(address)"))
        assert as_mapping([entry]) == {"balanceOf(address)": "0x70a08231"}
