"""Result writer tests"""

import json

import pandas as pd

from hybridrec.models import ScoredEntry
from hybridrec.output import dumps, to_frame, to_payload, write_csv

ENTRIES = [ScoredEntry("B", 0.56), ScoredEntry("A", 1.0)]


class TestPayload:
    """JSON document tests"""

    def test_entries_keep_return_order(self):
        assert to_payload(ENTRIES) == {
            "recommendations": [{"id": "B", "score": 0.56}, {"id": "A", "score": 1.0}]
        }

    def test_dumps_is_valid_json(self):
        assert json.loads(dumps(ENTRIES)) == to_payload(ENTRIES)

    def test_empty(self):
        assert json.loads(dumps([])) == {"recommendations": []}


class TestFrame:
    """DataFrame and CSV tests"""

    def test_frame_columns_and_rank(self):
        frame = to_frame(ENTRIES)

        assert list(frame.columns) == ["rank", "item_id", "score"]
        assert frame["rank"].tolist() == [1, 2]
        assert frame["item_id"].tolist() == ["B", "A"]

    def test_empty_frame(self):
        frame = to_frame([])

        assert frame.empty
        assert list(frame.columns) == ["rank", "item_id", "score"]

    def test_write_csv(self, tmp_path):
        path = write_csv(ENTRIES, tmp_path / "out" / "recs.csv")

        loaded = pd.read_csv(path)
        assert loaded["item_id"].tolist() == ["B", "A"]
        assert loaded["score"].tolist() == [0.56, 1.0]
