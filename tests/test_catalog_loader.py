from __future__ import annotations

from pathlib import Path

import pytest

from oltdash.core.catalog_loader import load_catalog
from oltdash.core.errors import CatalogValidationError


def _write_catalog(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_load_packaged_catalog() -> None:
    loaded = load_catalog()
    catalog = loaded.catalog
    assert loaded.warnings == ()
    assert [c.id for c in catalog.categories()] == ["core", "bandwidth", "provisioning", "statistics"]
    assert len(catalog) == 23

    onu_list = catalog.lookup("onu_list")
    assert onu_list is not None
    assert onu_list.display_name == "ONU List"
    assert onu_list.requires_onu_id is False

    rename = catalog.lookup("onu_rename")
    assert rename is not None
    assert rename.requires_onu_id is True
    assert rename.requires_name is True
    assert rename.category == "provisioning"


def test_user_catalog_adds_query(isolated_config: Path) -> None:
    _write_catalog(
        isolated_config / "oltdash" / "queries" / "extra.yaml",
        """
categories:
  - id: statistics
    name: Statistics & VLAN
    queries:
      - id: onu_optical_history
        name: Optical History
        requires_onu_id: true
""",
    )

    catalog = load_catalog().catalog
    descriptor = catalog.lookup("onu_optical_history")
    assert descriptor is not None
    assert descriptor.requires_onu_id is True
    assert catalog.in_category("statistics")[-1] == descriptor


def test_user_override_replaces_packaged_query(isolated_config: Path) -> None:
    _write_catalog(
        isolated_config / "oltdash" / "queries" / "override.yaml",
        """
categories:
  - id: lab
    name: Lab
    queries:
      - id: onu_list
        name: Lab ONU List
        requires_onu_id: "true"
""",
    )

    loaded = load_catalog()
    descriptor = loaded.catalog.lookup("onu_list")
    assert descriptor is not None
    assert descriptor.display_name == "Lab ONU List"
    assert descriptor.category == "lab"
    assert descriptor.requires_onu_id is True
    assert "onu_list" not in [d.id for d in loaded.catalog.in_category("core")]
    assert any("overrides" in warning for warning in loaded.warnings)


def test_missing_required_keys_rejected(isolated_config: Path) -> None:
    _write_catalog(
        isolated_config / "oltdash" / "queries" / "missing.yaml",
        """
categories:
  - id: lab
    queries:
      - id: lab_check
        name: Check
""",
    )

    with pytest.raises(CatalogValidationError):
        load_catalog()


def test_duplicate_yaml_keys_rejected(isolated_config: Path) -> None:
    _write_catalog(
        isolated_config / "oltdash" / "queries" / "dup.yaml",
        """
categories:
  - id: lab
    name: Lab
    name: Lab Again
    queries:
      - id: lab_check
        name: Check
""",
    )

    with pytest.raises(CatalogValidationError, match=r"Duplicate key 'name' at line \d+"):
        load_catalog()


def test_duplicate_query_ids_in_one_file_rejected(isolated_config: Path) -> None:
    _write_catalog(
        isolated_config / "oltdash" / "queries" / "twice.yaml",
        """
categories:
  - id: lab
    name: Lab
    queries:
      - id: lab_check
        name: Check
  - id: lab2
    name: Lab 2
    queries:
      - id: lab_check
        name: Check Again
""",
    )

    with pytest.raises(CatalogValidationError):
        load_catalog()


def test_invalid_flag_value_rejected(isolated_config: Path) -> None:
    _write_catalog(
        isolated_config / "oltdash" / "queries" / "flag.yaml",
        """
categories:
  - id: lab
    name: Lab
    queries:
      - id: lab_check
        name: Check
        requires_name: yes
""",
    )

    with pytest.raises(CatalogValidationError):
        load_catalog()
