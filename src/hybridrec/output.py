from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence, Union

import pandas as pd

from .models import ScoredEntry


def to_payload(entries: Sequence[ScoredEntry]) -> Dict[str, List[Dict[str, object]]]:
    return {
        "recommendations": [{"id": entry.item_id, "score": float(entry.score)} for entry in entries]
    }


def dumps(entries: Sequence[ScoredEntry], indent: int = 2) -> str:
    return json.dumps(to_payload(entries), indent=indent, ensure_ascii=False)


def to_frame(entries: Sequence[ScoredEntry]) -> pd.DataFrame:
    """Tabular view of a result list; ``rank`` follows the returned order, starting at 1."""
    rows = [
        {"rank": rank, "item_id": entry.item_id, "score": float(entry.score)}
        for rank, entry in enumerate(entries, start=1)
    ]
    return pd.DataFrame(rows, columns=["rank", "item_id", "score"])


def write_csv(entries: Sequence[ScoredEntry], path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    to_frame(entries).to_csv(path, index=False)
    return path
