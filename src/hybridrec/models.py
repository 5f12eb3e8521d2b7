from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence, Tuple

import pandas as pd


class DuplicateItemError(ValueError):
    """Raised when a catalog contains the same item id more than once."""

    def __init__(self, item_ids: Sequence[str]):
        self.item_ids = list(item_ids)
        super().__init__(f"duplicate item ids in catalog: {', '.join(self.item_ids)}")


@dataclass(frozen=True)
class Tag:
    name: str
    value: float


@dataclass(frozen=True)
class Item:
    id: str
    tags: Tuple[Tag, ...] = ()
    view_count: float = 0.0
    interaction_time: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))


@dataclass(frozen=True)
class UserProfile:
    tags: Tuple[Tag, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tags", tuple(self.tags))


@dataclass(frozen=True)
class Peer:
    """A similar user whose likes feed the collaborative score.

    ``liked_items`` behaves as a set: repeats are collapsed, first occurrence
    order is kept.
    """

    id: str
    similarity: float
    liked_items: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "liked_items", tuple(dict.fromkeys(self.liked_items)))


@dataclass(frozen=True)
class ScoredEntry:
    item_id: str
    score: float


def tags_from_mapping(mapping: Mapping[str, float]) -> Tuple[Tag, ...]:
    return tuple(Tag(name=str(name), value=float(value)) for name, value in mapping.items())


def catalog_frame(catalog: Iterable[Item]) -> pd.DataFrame:
    rows = [
        {
            "item_id": item.id,
            "view_count": float(item.view_count),
            "interaction_time": float(item.interaction_time),
        }
        for item in catalog
    ]
    return pd.DataFrame(rows, columns=["item_id", "view_count", "interaction_time"])

