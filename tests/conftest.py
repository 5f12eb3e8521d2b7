"""Shared fixtures for the recommendation tests."""

import numpy as np
import pytest

from hybridrec.config import MetricsConfig
from hybridrec.models import Item, Peer, UserProfile, tags_from_mapping

REQUEST_TEXT = """\
USER_PROFILE
1
scifi 1.0

WORKS
2
A
1
scifi 1.0
100 50
B
1
fantasy 1.0
10 5

SIMILAR_USERS
2
u1
0.8
2
X
Y
u2
0.3
1
Y

PARAMS
3 0.0
METRICS_CONFIG
1 0.1 0.1 1.0
"""


@pytest.fixture
def scifi_user():
    return UserProfile(tags_from_mapping({"scifi": 1.0}))


@pytest.fixture
def small_catalog():
    return [
        Item("A", tags_from_mapping({"scifi": 1.0}), view_count=100, interaction_time=50),
        Item("B", tags_from_mapping({"fantasy": 1.0}), view_count=10, interaction_time=5),
    ]


@pytest.fixture
def metrics_on():
    return MetricsConfig(use_metrics=True, weight_views=0.1, weight_time=0.1, weight_tags=1.0)


@pytest.fixture
def peers():
    return [
        Peer("u1", 0.8, ("X", "Y")),
        Peer("u2", 0.3, ("Y",)),
    ]


@pytest.fixture
def request_text():
    return REQUEST_TEXT


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
