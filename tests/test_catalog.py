from __future__ import annotations

from oltdash.core.catalog_loader import load_catalog


def test_lookup_round_trips_every_identifier() -> None:
    catalog = load_catalog().catalog
    for descriptor in catalog:
        found = catalog.lookup(descriptor.id)
        assert found is not None
        assert found.id == descriptor.id


def test_unknown_identifier_returns_sentinel() -> None:
    catalog = load_catalog().catalog
    assert catalog.lookup("onu_firmware") is None
    assert "onu_firmware" not in catalog


def test_unknown_identifier_requires_no_optional_fields() -> None:
    catalog = load_catalog().catalog
    descriptor = catalog.requirements_for("onu_firmware")
    assert descriptor.id == "onu_firmware"
    assert descriptor.requires_onu_id is False
    assert descriptor.requires_name is False


def test_categories_partition_the_catalog() -> None:
    catalog = load_catalog().catalog
    seen: list[str] = []
    for category in catalog.categories():
        members = catalog.in_category(category.id)
        assert members
        assert all(d.category == category.id for d in members)
        seen.extend(d.id for d in members)
    assert len(seen) == len(set(seen)) == len(catalog)


def test_unknown_category_is_empty() -> None:
    catalog = load_catalog().catalog
    assert catalog.in_category("firmware") == ()
