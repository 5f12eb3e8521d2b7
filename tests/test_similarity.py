"""Tag-vector cosine similarity tests"""

import math

import pytest

from hybridrec.models import Item, Tag, UserProfile, tags_from_mapping
from hybridrec.similarity import cosine_similarity


def _user(**tags):
    return UserProfile(tags_from_mapping(tags))


def _item(**tags):
    return Item("i", tags_from_mapping(tags))


class TestCosineSimilarity:
    """cosine_similarity tests"""

    def test_identical_single_tag_is_one(self):
        """Identical non-zero single-tag vectors"""
        assert cosine_similarity(_user(scifi=2.0), _item(scifi=2.0)) == 1.0

    def test_disjoint_tags_are_zero(self):
        """No shared tag names"""
        assert cosine_similarity(_user(scifi=1.0), _item(fantasy=1.0)) == 0.0

    def test_swapping_sides_gives_same_value(self):
        """Swapping user and item tag sets"""
        a = {"scifi": 1.0, "drama": 0.5}
        b = {"scifi": 0.3, "comedy": 2.0}

        forward = cosine_similarity(_user(**a), _item(**b))
        backward = cosine_similarity(_user(**b), _item(**a))

        assert forward == pytest.approx(backward)

    def test_partial_overlap(self):
        """Unshared tags only count towards their own norm"""
        user = _user(scifi=1.0, drama=1.0)
        item = _item(scifi=1.0)

        assert cosine_similarity(user, item) == pytest.approx(1 / math.sqrt(2))

    @pytest.mark.parametrize(
        "user, item",
        [
            (UserProfile(()), _item(scifi=1.0)),
            (_user(scifi=1.0), Item("i", ())),
            (_user(scifi=0.0), _item(scifi=1.0)),
        ],
    )
    def test_zero_norm_is_zero(self, user, item):
        """Zero-magnitude vectors give exactly 0"""
        assert cosine_similarity(user, item) == 0.0

    def test_duplicate_user_tag_uses_first_occurrence(self):
        """Duplicate user tag names resolve to the first one"""
        user = UserProfile((Tag("scifi", 1.0), Tag("scifi", -1.0)))
        item = Item("i", (Tag("scifi", 1.0),))

        # dot uses +1.0, the norm covers both user tags
        assert cosine_similarity(user, item) == pytest.approx(1 / math.sqrt(2))

    def test_negative_values_can_go_below_zero(self):
        """No clamping is applied"""
        assert cosine_similarity(_user(scifi=1.0), _item(scifi=-1.0)) == pytest.approx(-1.0)

    def test_huge_values_stay_finite(self):
        """Values whose squares overflow still give a finite similarity"""
        assert cosine_similarity(_user(a=1e200), _item(a=1e200)) == pytest.approx(1.0)

    def test_huge_partial_overlap(self):
        """Scaling keeps the ratio for mixed-size vectors"""
        user = _user(a=3e200, b=4e200)
        item = _item(a=1e200)

        assert cosine_similarity(user, item) == pytest.approx(0.6)

    def test_tiny_values_do_not_underflow(self):
        """Subnormal-range values still give the exact cosine"""
        assert cosine_similarity(_user(a=1e-200), _item(a=1e-200)) == pytest.approx(1.0)
