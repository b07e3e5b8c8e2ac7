from __future__ import annotations

import json
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from garmentsearch.config.settings import (
    Settings,
    default_sample_seed,
    default_sample_size,
    resolve_catalog_path,
)
from .facets import ALL_COLORS, ALL_SIZES, Color, Size


log = logging.getLogger(__name__)


class CatalogFormatError(ValueError):
    """Raised when a catalog file does not have the expected shape."""


def default_name(size: Size, color: Color) -> str:
    return f"{color.label} - {size.label}"


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    size: Size
    color: Color

    @classmethod
    def create(cls, size: Size, color: Color, name: Optional[str] = None) -> "Item":
        return cls(uuid.uuid4().hex, name or default_name(size, color), size, color)

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "size": self.size.id, "color": self.color.id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        try:
            size = Size.parse(str(data["size"]))
            color = Color.parse(str(data["color"]))
        except KeyError as exc:
            raise CatalogFormatError(f"Catalog item is missing {exc.args[0]!r}: {data!r}") from exc
        return cls(
            uuid.uuid4().hex if data.get("id") is None else str(data["id"]),
            str(data.get("name") or default_name(size, color)),
            size,
            color,
        )


def build_sample_catalog(count: int, seed: Optional[int] = None) -> List[Item]:
    """Random catalog with sizes and colors drawn uniformly from their universes."""
    if count < 0:
        raise ValueError("count must be >= 0")
    rng = random.Random(seed)
    items: List[Item] = []
    for _ in range(count):
        size = rng.choice(ALL_SIZES)
        color = rng.choice(ALL_COLORS)
        # Seeded ids keep sample files reproducible.
        item_id = uuid.UUID(int=rng.getrandbits(128), version=4).hex
        items.append(Item(item_id, default_name(size, color), size, color))
    return items


def load_catalog(path: Path | str) -> List[Item]:
    path = Path(path).expanduser()
    try:
        data = json.loads(path.read_text("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogFormatError(f"{path}: not a UTF-8 JSON file ({exc})") from exc
    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise CatalogFormatError(f"{path}: expected a list of items or an object with 'items'")
    items: List[Item] = []
    for raw in data:
        if not isinstance(raw, dict):
            raise CatalogFormatError(f"{path}: catalog entries must be objects, got {raw!r}")
        items.append(Item.from_dict(raw))
    log.info(f"Loaded {len(items)} items from {path}")
    return items


def dump_catalog(items: Iterable[Item], path: Path | str) -> None:
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"items": [item.to_dict() for item in items]}
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def resolve_catalog(
    settings: Settings,
    explicit: Path | str | None = None,
    sample: Optional[int] = None,
    seed: Optional[int] = None,
) -> List[Item]:
    """Catalog file if one is configured, else a generated sample catalog."""
    if sample is None:
        path = resolve_catalog_path(settings, explicit)
        if path is not None:
            return load_catalog(path)
    count = default_sample_size() if sample is None else sample
    seed = default_sample_seed() if seed is None else seed
    log.info(f"No catalog file configured, using {count} sample items (seed {seed})")
    return build_sample_catalog(count, seed)
