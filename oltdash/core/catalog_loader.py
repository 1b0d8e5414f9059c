"""Query catalog loading and validation for YAML-based catalog documents."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from oltdash.core.catalog import QueryCatalog
from oltdash.core.errors import CatalogLoadError, CatalogValidationError
from oltdash.core.model import Category, QueryDescriptor

LOGGER = logging.getLogger(__name__)

_BOOL_TAG = "tag:yaml.org,2002:bool"
_FLAG_VALUES = {"true": True, "false": False}


class CatalogYamlLoader(yaml.SafeLoader):
    """Safe loader for catalog documents.

    Repeated mapping keys are errors, and `yes`/`on`/`true` stay plain strings
    so flag parsing happens only in `_flag`.
    """

    yaml_implicit_resolvers = {
        first: [(tag, pattern) for tag, pattern in resolvers if tag != _BOOL_TAG]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> dict[Any, Any]:
        keys = [self.construct_object(key_node, deep=True) for key_node, _ in node.value]
        repeated = sorted({str(key) for key in keys if keys.count(key) > 1})
        if repeated:
            raise CatalogValidationError(
                f"Duplicate key '{', '.join(repeated)}' at line {node.start_mark.line + 1}"
            )
        return super().construct_mapping(node, deep=deep)


@dataclass(frozen=True)
class LoadedCatalog:
    catalog: QueryCatalog
    warnings: tuple[str, ...]


@lru_cache(maxsize=1)
def _catalog_validator() -> Any:
    schema_file = resources.files("oltdash.schemas") / "catalog.schema.json"
    schema = json.loads(schema_file.read_text(encoding="utf-8"))
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _user_catalog_dir() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "oltdash/queries"


def _parse_document(source: Path | Traversable) -> dict[str, Any]:
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogLoadError(f"Could not read catalog file {source}: {exc}") from exc
    try:
        document = yaml.load(text, Loader=CatalogYamlLoader)
    except yaml.YAMLError as exc:
        raise CatalogValidationError(f"Invalid YAML in {source}: {exc}") from exc
    if isinstance(document, dict):
        return document
    raise CatalogValidationError(f"Catalog file {source} must contain a mapping at root")


def _flag(value: Any, *, context: str) -> bool:
    if isinstance(value, bool):
        return value
    flag = _FLAG_VALUES.get(str(value).strip().lower())
    if flag is None:
        raise CatalogValidationError(f"{context} must be boolean true/false")
    return flag


def _build_entries(
    doc: dict[str, Any], source: Path | Traversable
) -> list[tuple[Category, list[QueryDescriptor]]]:
    validator = _catalog_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise CatalogValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    seen: set[str] = set()
    entries: list[tuple[Category, list[QueryDescriptor]]] = []
    for category_doc in doc["categories"]:
        descriptors: list[QueryDescriptor] = []
        for query_doc in category_doc["queries"]:
            query_id = query_doc["id"]
            if query_id in seen:
                raise CatalogValidationError(f"Query '{query_id}' is declared more than once in {source}")
            seen.add(query_id)
            descriptors.append(
                QueryDescriptor(
                    id=query_id,
                    display_name=query_doc["name"],
                    category=category_doc["id"],
                    requires_onu_id=_flag(
                        query_doc.get("requires_onu_id", False),
                        context=f"{query_id}.requires_onu_id",
                    ),
                    requires_name=_flag(
                        query_doc.get("requires_name", False),
                        context=f"{query_id}.requires_name",
                    ),
                )
            )
        category = Category(
            id=category_doc["id"],
            name=category_doc["name"],
            queries=tuple(d.id for d in descriptors),
        )
        entries.append((category, descriptors))
    return entries


def _iter_packaged_catalog_paths() -> list[Traversable]:
    catalog_root = resources.files("oltdash.catalog")
    return [item for item in catalog_root.iterdir() if item.name.endswith((".yml", ".yaml"))]


def _iter_user_catalog_paths() -> list[Path]:
    directory = _user_catalog_dir()
    if not directory.exists() or not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"})


class _CatalogBuilder:
    def __init__(self) -> None:
        self.descriptors: dict[str, QueryDescriptor] = {}
        self.category_names: dict[str, str] = {}
        self.members: dict[str, list[str]] = {}

    def add(self, category: Category, descriptor: QueryDescriptor) -> None:
        self.category_names.setdefault(category.id, category.name)
        members = self.members.setdefault(category.id, [])
        previous = self.descriptors.get(descriptor.id)
        if previous is not None and previous.category != descriptor.category:
            self.members[previous.category].remove(descriptor.id)
        if previous is None or previous.category != descriptor.category:
            members.append(descriptor.id)
        self.descriptors[descriptor.id] = descriptor

    def build(self) -> QueryCatalog:
        categories = tuple(
            Category(id=cid, name=self.category_names[cid], queries=tuple(queries))
            for cid, queries in self.members.items()
            if queries
        )
        return QueryCatalog(self.descriptors, categories)


def load_catalog() -> LoadedCatalog:
    builder = _CatalogBuilder()
    warnings: list[str] = []

    for path in sorted(_iter_packaged_catalog_paths(), key=lambda p: p.name):
        doc = _parse_document(path)
        for category, descriptors in _build_entries(doc, path):
            for descriptor in descriptors:
                if descriptor.id in builder.descriptors:
                    raise CatalogValidationError(
                        f"Query '{descriptor.id}' in {path} is already declared by another packaged catalog"
                    )
                builder.add(category, descriptor)

    for path in _iter_user_catalog_paths():
        doc = _parse_document(path)
        for category, descriptors in _build_entries(doc, path):
            for descriptor in descriptors:
                if descriptor.id in builder.descriptors:
                    warning = f"User query '{descriptor.id}' overrides an existing catalog entry"
                    LOGGER.warning(warning)
                    warnings.append(warning)
                builder.add(category, descriptor)

    catalog = builder.build()
    LOGGER.debug("Loaded %d queries in %d categories", len(catalog), len(catalog.categories()))
    return LoadedCatalog(catalog=catalog, warnings=tuple(warnings))
