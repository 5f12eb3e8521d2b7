from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from .config import RANDOM_POOLS
from .models import ScoredEntry

LOGGER = logging.getLogger(__name__)


def _weighted_frame(entries: Sequence[ScoredEntry], weight: float) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "item_id": [entry.item_id for entry in entries],
            "weighted": [weight * entry.score for entry in entries],
        },
        columns=["item_id", "weighted"],
    )


def combine_recommendations(
    content_recs: Sequence[ScoredEntry],
    collab_recs: Sequence[ScoredEntry],
    content_weight: float = 0.5,
    collab_weight: float = 0.5,
) -> List[ScoredEntry]:
    """
    Merge two rankings into one weighted score per item.

    An item known to only one of the rankings keeps that ranking's weighted
    score; the missing side counts as zero.
    """
    frames = [
        frame
        for frame in (
            _weighted_frame(content_recs, content_weight),
            _weighted_frame(collab_recs, collab_weight),
        )
        if not frame.empty
    ]
    if not frames:
        return []
    contributions = pd.concat(frames, ignore_index=True)
    combined = contributions.groupby("item_id", sort=False)["weighted"].sum()
    rows = [ScoredEntry(str(item_id), float(score)) for item_id, score in combined.items()]
    return sorted(rows, key=lambda r: r.score, reverse=True)


def _shuffled(entries: Sequence[ScoredEntry], rng: np.random.Generator) -> List[ScoredEntry]:
    return [entries[i] for i in rng.permutation(len(entries))]


def get_randomized_recommendations(
    recs: Sequence[ScoredEntry],
    num_recommendations: int,
    random_factor: float,
    rng: Optional[np.random.Generator] = None,
    random_pool: str = "top",
    shuffle: bool = True,
) -> List[ScoredEntry]:
    """
    Mix the top of a ranking with a random sample so repeated requests vary.

    ``floor(num_recommendations * random_factor)`` slots are random, the rest
    are the best-ranked entries. With ``random_pool="top"`` the random slots
    are drawn from that same top slice and may repeat guaranteed entries;
    ``random_pool="tail"`` draws them from the entries ranked below it. The
    final list is shuffled unless ``shuffle`` is False. Returns fewer entries
    than requested when the ranking is short.
    """
    if random_pool not in RANDOM_POOLS:
        raise ValueError(f"random_pool must be one of {RANDOM_POOLS}, got {random_pool!r}")
    if num_recommendations <= 0:
        return []
    if rng is None:
        rng = np.random.default_rng()

    # factor is clamped to [0, 1]; NaN counts as 0
    factor = 0.0 if math.isnan(random_factor) else min(max(random_factor, 0.0), 1.0)
    num_random = math.floor(num_recommendations * factor)
    num_top = num_recommendations - num_random

    final_recs = list(recs[:num_top])
    if random_pool == "top":
        pool = list(recs[:num_top])
    else:
        pool = list(recs[num_top:])
    if num_random > 0 and pool:
        final_recs.extend(_shuffled(pool, rng)[:num_random])

    LOGGER.debug(
        "Randomized %d entries: %d top, %d random from %s pool of %d",
        len(final_recs),
        min(num_top, len(recs)),
        len(final_recs) - min(num_top, len(recs)),
        random_pool,
        len(pool),
    )
    if shuffle:
        final_recs = _shuffled(final_recs, rng)
    return final_recs
