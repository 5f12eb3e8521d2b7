from __future__ import annotations

import logging
from typing import List, Sequence

from .config import MetricsConfig
from .models import DuplicateItemError, Item, ScoredEntry, UserProfile, catalog_frame
from .similarity import cosine_similarity

LOGGER = logging.getLogger(__name__)


def compute_item_score(
    user: UserProfile,
    item: Item,
    config: MetricsConfig,
    max_views: float,
    max_time: float,
) -> float:
    """Tag similarity plus, optionally, views and time normalized by the catalog maxima."""
    score = config.weight_tags * cosine_similarity(user, item)
    if config.use_metrics:
        norm_views = item.view_count / max_views if max_views > 0 else 0.0
        norm_time = item.interaction_time / max_time if max_time > 0 else 0.0
        score += config.weight_views * norm_views + config.weight_time * norm_time
    return score


def recommend_content_based(
    user: UserProfile,
    catalog: Sequence[Item],
    config: MetricsConfig,
) -> List[ScoredEntry]:
    """
    Score every catalog item against the user profile.

    Returns one entry per item, highest score first. Items with equal scores
    keep their catalog order.
    """
    if not catalog:
        return []
    frame = catalog_frame(catalog)
    dupes = frame.loc[frame["item_id"].duplicated(), "item_id"].unique().tolist()
    if dupes:
        raise DuplicateItemError(dupes)

    max_views = max(float(frame["view_count"].max()), 0.0)
    max_time = max(float(frame["interaction_time"].max()), 0.0)
    LOGGER.debug(
        "Scoring %d items (max_views=%s, max_time=%s, use_metrics=%s)",
        len(frame),
        max_views,
        max_time,
        config.use_metrics,
    )

    rows = [
        ScoredEntry(item.id, compute_item_score(user, item, config, max_views, max_time))
        for item in catalog
    ]
    return sorted(rows, key=lambda r: r.score, reverse=True)
