from __future__ import annotations

import logging
from typing import List, Sequence

import pandas as pd

from .models import Peer, ScoredEntry

LOGGER = logging.getLogger(__name__)


def _peer_likes(peers: Sequence[Peer]) -> pd.DataFrame:
    rows = [
        {"peer_id": peer.id, "item_id": item_id, "similarity": float(peer.similarity)}
        for peer in peers
        for item_id in peer.liked_items
    ]
    return pd.DataFrame(rows, columns=["peer_id", "item_id", "similarity"])


def recommend_collaborative(peers: Sequence[Peer]) -> List[ScoredEntry]:
    """
    Rank items by the summed similarity of the peers who liked them.

    Items liked by several peers accumulate every contributing similarity.
    Items no peer liked are absent from the result rather than scored zero.
    """
    likes = _peer_likes(peers)
    if likes.empty:
        return []
    totals = likes.groupby("item_id", sort=False)["similarity"].sum()
    LOGGER.debug("Aggregated %d likes from %d peers into %d items", len(likes), len(peers), len(totals))
    rows = [ScoredEntry(str(item_id), float(score)) for item_id, score in totals.items()]
    return sorted(rows, key=lambda r: r.score, reverse=True)
