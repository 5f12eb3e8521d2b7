from __future__ import annotations

from typing import Dict, Sequence

import numpy as np

from .models import Item, Tag, UserProfile


def _norm(tags: Sequence[Tag]) -> float:
    if not tags:
        return 0.0
    values = np.array([tag.value for tag in tags], dtype=float)
    scale = float(np.max(np.abs(values)))
    if scale == 0:
        return 0.0
    # scaled so squaring large or tiny values cannot overflow or underflow
    return scale * float(np.linalg.norm(values / scale))


def _first_match_lookup(tags: Sequence[Tag]) -> Dict[str, float]:
    lookup: Dict[str, float] = {}
    for tag in tags:
        # duplicate names resolve to the first occurrence
        lookup.setdefault(tag.name, tag.value)
    return lookup


def cosine_similarity(user: UserProfile, item: Item) -> float:
    """
    Cosine similarity between the user's and the item's tag vectors.

    Tags are sparse vectors keyed by name. A tag present on one side only adds
    to that side's norm but not to the dot product. Returns exactly 0.0 when
    either vector has zero magnitude. Values are not clamped, so negative tag
    weights can push the result below zero.
    """
    norm_user = _norm(user.tags)
    norm_item = _norm(item.tags)
    if norm_user == 0 or norm_item == 0:
        return 0.0
    user_values = _first_match_lookup(user.tags)
    dot = 0.0
    for tag in item.tags:
        match = user_values.get(tag.name)
        if match is not None:
            dot += (tag.value / norm_item) * (match / norm_user)
    return dot
