from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Sequence, Tuple, Type

from .catalog import Item
from .facets import ALL_COLORS, ALL_SIZES, Color, FacetValue, Size, UnknownFacetValueError


log = logging.getLogger(__name__)


@dataclass
class SearchOptions:
    sizes: Sequence[Size] = field(default_factory=list)
    colors: Sequence[Color] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.sizes or self.colors)


@dataclass(frozen=True)
class FacetCount:
    value: FacetValue
    count: int


@dataclass
class SearchResults:
    items: List[Item] = field(default_factory=list)
    size_counts: List[FacetCount] = field(default_factory=list)
    color_counts: List[FacetCount] = field(default_factory=list)

    def size_count(self, size: Size) -> int:
        return _lookup(self.size_counts, size)

    def color_count(self, color: Color) -> int:
        return _lookup(self.color_counts, color)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "size_counts": [{"size": fc.value.id, "count": fc.count} for fc in self.size_counts],
            "color_counts": [{"color": fc.value.id, "count": fc.count} for fc in self.color_counts],
        }


def _lookup(counts: Sequence[FacetCount], value: FacetValue) -> int:
    for fc in counts:
        if fc.value is value:
            return fc.count
    raise UnknownFacetValueError(f"No facet count for {value!r}")


def _selected(values: Iterable[Any], kind: Type[FacetValue]) -> FrozenSet[FacetValue]:
    out = set()
    for v in values or ():
        if not isinstance(v, kind):
            raise UnknownFacetValueError(f"Unknown {kind.__name__.lower()} in query: {v!r}")
        out.add(v)
    return frozenset(out)


def facet_counts(
    items: Iterable[Item],
    universe: Sequence[FacetValue],
    key: Callable[[Item], FacetValue],
) -> List[FacetCount]:
    """Count ``items`` per facet value, with a zero entry for every value in ``universe``."""
    counts: Dict[FacetValue, int] = {value: 0 for value in universe}
    for item in items:
        value = key(item)
        if value not in counts:
            raise UnknownFacetValueError(f"Item {item.id} has unknown facet value {value!r}")
        counts[value] += 1
    return [FacetCount(value, counts[value]) for value in universe]


class SearchEngine:
    """Faceted search over a fixed catalog of garments.

    The catalog is copied into a tuple at construction, so the caller's
    collection may change afterwards without affecting searches, and
    concurrent ``search`` calls need no locking.
    """

    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: Tuple[Item, ...] = tuple(items)
        for item in self._items:
            if item.size not in ALL_SIZES or item.color not in ALL_COLORS:
                raise UnknownFacetValueError(f"Item {item.id} has a size or color outside the catalog universe")
        log.debug(f"Search engine ready with {len(self._items)} items")

    @property
    def items(self) -> Tuple[Item, ...]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def search(self, options: SearchOptions) -> SearchResults:
        sizes = _selected(options.sizes, Size)
        colors = _selected(options.colors, Color)

        # Empty selection on a facet means no restriction on it.
        matches = [
            item for item in self._items
            if (not colors or item.color in colors) and (not sizes or item.size in sizes)
        ]

        results = SearchResults(
            items=matches,
            size_counts=facet_counts(matches, ALL_SIZES, lambda i: i.size),
            color_counts=facet_counts(matches, ALL_COLORS, lambda i: i.color),
        )
        if log.isEnabledFor(logging.DEBUG):
            log.debug(f"Search sizes={sorted(s.id for s in sizes)} colors={sorted(c.id for c in colors)}: "
                      f"{len(matches)} of {len(self._items)} items")
        return results
