import pytest

from expense_catalog.services.category_refs import (
    GlobalCategoryRef,
    TenantCategoryRef,
    parse_category_ref,
)


@pytest.mark.parametrize("raw,expected", [
    ("42", TenantCategoryRef(42)),
    (" 42 ", TenantCategoryRef(42)),
    ("global_7", GlobalCategoryRef(7)),
    ("2147483647", TenantCategoryRef(2147483647)),
])
def test_parse_valid_identifiers(raw, expected):
    assert parse_category_ref(raw) == expected


@pytest.mark.parametrize("raw", [
    "", "abc", "global_", "global_abc", "-3", "4.2", "²", "GLOBAL_7", "global_global_1",
    # beyond the Integer primary key range
    "2147483648", "99999999999999999999", "global_99999999999999999999",
])
def test_parse_malformed_identifiers(raw):
    assert parse_category_ref(raw) is None
