"""Immutable registry of query descriptors, grouped into navigation categories."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from oltdash.core.model import Category, QueryDescriptor


class QueryCatalog:
    def __init__(
        self,
        descriptors: Mapping[str, QueryDescriptor],
        categories: tuple[Category, ...],
    ) -> None:
        self._descriptors = MappingProxyType(dict(descriptors))
        self._categories = categories

    def lookup(self, query_id: str) -> QueryDescriptor | None:
        """Return the descriptor for `query_id`, or None when it is not catalogued."""
        return self._descriptors.get(query_id)

    def requirements_for(self, query_id: str) -> QueryDescriptor:
        """Descriptor to build requests with; unknown ids need no optional fields."""
        descriptor = self.lookup(query_id)
        if descriptor is not None:
            return descriptor
        return QueryDescriptor(id=query_id, display_name=query_id, category="")

    def categories(self) -> tuple[Category, ...]:
        return self._categories

    def in_category(self, category_id: str) -> tuple[QueryDescriptor, ...]:
        for category in self._categories:
            if category.id == category_id:
                return tuple(self._descriptors[q] for q in category.queries)
        return ()

    def __contains__(self, query_id: object) -> bool:
        return query_id in self._descriptors

    def __iter__(self) -> Iterator[QueryDescriptor]:
        for category in self._categories:
            for query_id in category.queries:
                yield self._descriptors[query_id]

    def __len__(self) -> int:
        return len(self._descriptors)
