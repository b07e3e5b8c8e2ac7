from __future__ import annotations

from enum import Enum
from typing import Tuple, Type, TypeVar, Union


class UnknownFacetValueError(ValueError):
    """Raised for a size or color that is not part of its universe."""


F = TypeVar("F", bound="_FacetEnum")


class _FacetEnum(Enum):
    # Member value is the stable identifier; equality follows from it.

    @property
    def id(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.name.title()

    @classmethod
    def parse(cls: Type[F], text: str) -> F:
        key = (text or "").strip().lower()
        for member in cls:
            if key in (member.value, member.label.lower()):
                return member
        raise UnknownFacetValueError(f"Unknown {cls.__name__.lower()}: {text!r}")

    def __str__(self) -> str:
        return self.label


class Size(_FacetEnum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Color(_FacetEnum):
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    WHITE = "white"
    BLACK = "black"


ALL_SIZES: Tuple[Size, ...] = (Size.SMALL, Size.MEDIUM, Size.LARGE)
ALL_COLORS: Tuple[Color, ...] = (Color.RED, Color.BLUE, Color.YELLOW, Color.WHITE, Color.BLACK)

FacetValue = Union[Size, Color]
