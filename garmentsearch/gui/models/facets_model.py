from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from garmentsearch.index.engine import FacetCount, SearchOptions
from garmentsearch.index.facets import Color, Size


@dataclass
class FacetCounts:
    sizes: List[FacetCount] = field(default_factory=list)
    colors: List[FacetCount] = field(default_factory=list)


@dataclass
class FacetSelection:
    sizes: List[Size] = field(default_factory=list)
    colors: List[Color] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.sizes or self.colors)

    def to_options(self) -> SearchOptions:
        return SearchOptions(sizes=list(self.sizes), colors=list(self.colors))
