"""
Reader for the sectioned plain-text request format.

A request is made of five sections, each introduced by a line holding only
the section name and followed by whitespace-separated tokens::

    USER_PROFILE
    <n>  then n x  <tag> <value>
    WORKS
    <n>  then n x  <id> <n_tags> (<tag> <value>)* <view_count> <interaction_time>
    SIMILAR_USERS
    <n>  then n x  <id> <similarity> <n_liked> <item_id>*
    PARAMS
    <num_recommendations> <random_factor>
    METRICS_CONFIG
    <use_metrics 0|1> <weight_views> <weight_time> <weight_tags>

Tokens left over at the end of a section are ignored.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Sequence, TextIO, Tuple, Union

from .config import MetricsConfig
from .models import Item, Peer, Tag, UserProfile

LOGGER = logging.getLogger(__name__)

SECTIONS: Tuple[str, ...] = (
    "USER_PROFILE",
    "WORKS",
    "SIMILAR_USERS",
    "PARAMS",
    "METRICS_CONFIG",
)


class ProtocolError(ValueError):
    """Raised when a request document is missing data or holds malformed values."""

    def __init__(self, section: str, message: str):
        self.section = section
        super().__init__(f"{section}: {message}")


@dataclass(frozen=True)
class RecommendationRequest:
    user: UserProfile
    catalog: Tuple[Item, ...]
    peers: Tuple[Peer, ...]
    num_recommendations: int
    random_factor: float
    metrics: MetricsConfig = field(default_factory=MetricsConfig)


class _SectionReader:
    def __init__(self, section: str, tokens: Sequence[str]):
        self.section = section
        self._tokens = list(tokens)
        self._pos = 0

    def _next(self, what: str) -> str:
        if self._pos >= len(self._tokens):
            raise ProtocolError(self.section, f"unexpected end of section while reading {what}")
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def word(self, what: str) -> str:
        return self._next(what)

    def integer(self, what: str) -> int:
        token = self._next(what)
        try:
            return int(token)
        except ValueError:
            raise ProtocolError(self.section, f"{what} must be an integer, got {token!r}") from None

    def count(self, what: str) -> int:
        value = self.integer(what)
        if value < 0:
            raise ProtocolError(self.section, f"{what} must not be negative, got {value}")
        return value

    def real(self, what: str, non_negative: bool = False) -> float:
        token = self._next(what)
        try:
            value = float(token)
        except ValueError:
            raise ProtocolError(self.section, f"{what} must be a number, got {token!r}") from None
        if not math.isfinite(value):
            raise ProtocolError(self.section, f"{what} must be finite, got {token!r}")
        if non_negative and value < 0:
            raise ProtocolError(self.section, f"{what} must not be negative, got {token!r}")
        return value

    def tags(self, n: int, owner: str) -> List[Tag]:
        return [
            Tag(self.word(f"tag name of {owner}"), self.real(f"tag value of {owner}"))
            for _ in range(n)
        ]


def _split_sections(text: str) -> Dict[str, List[str]]:
    sections: Dict[str, List[str]] = {}
    current = None
    for line in text.splitlines():
        stripped = line.strip()
        if stripped in SECTIONS:
            current = stripped
            sections.setdefault(current, [])
            continue
        if current is not None:
            sections[current].extend(stripped.split())
    missing = [name for name in SECTIONS if name not in sections]
    if missing:
        raise ProtocolError(missing[0], "section header not found")
    return sections


def _read_user(reader: _SectionReader) -> UserProfile:
    n_tags = reader.count("number of user tags")
    return UserProfile(tuple(reader.tags(n_tags, "user")))


def _read_catalog(reader: _SectionReader) -> Tuple[Item, ...]:
    items = []
    for _ in range(reader.count("number of works")):
        item_id = reader.word("work id")
        n_tags = reader.count(f"number of tags of {item_id}")
        tags = reader.tags(n_tags, item_id)
        views = reader.real(f"view count of {item_id}", non_negative=True)
        time_spent = reader.real(f"interaction time of {item_id}", non_negative=True)
        items.append(Item(item_id, tuple(tags), views, time_spent))
    return tuple(items)


def _read_peers(reader: _SectionReader) -> Tuple[Peer, ...]:
    peers = []
    for _ in range(reader.count("number of similar users")):
        peer_id = reader.word("similar user id")
        similarity = reader.real(f"similarity of {peer_id}")
        n_liked = reader.count(f"number of works liked by {peer_id}")
        liked = tuple(reader.word(f"work liked by {peer_id}") for _ in range(n_liked))
        peers.append(Peer(peer_id, similarity, liked))
    return tuple(peers)


def _read_metrics(reader: _SectionReader) -> MetricsConfig:
    use_metrics = reader.integer("use_metrics flag") != 0
    return MetricsConfig(
        use_metrics=use_metrics,
        weight_views=reader.real("weight_views"),
        weight_time=reader.real("weight_time"),
        weight_tags=reader.real("weight_tags"),
    )


def parse_request(text: str) -> RecommendationRequest:
    sections = _split_sections(text)
    user = _read_user(_SectionReader("USER_PROFILE", sections["USER_PROFILE"]))
    catalog = _read_catalog(_SectionReader("WORKS", sections["WORKS"]))
    peers = _read_peers(_SectionReader("SIMILAR_USERS", sections["SIMILAR_USERS"]))

    params = _SectionReader("PARAMS", sections["PARAMS"])
    num_recommendations = params.integer("number of recommendations")
    random_factor = params.real("random factor")

    metrics = _read_metrics(_SectionReader("METRICS_CONFIG", sections["METRICS_CONFIG"]))
    LOGGER.debug(
        "Parsed request: %d user tags, %d works, %d similar users",
        len(user.tags),
        len(catalog),
        len(peers),
    )
    return RecommendationRequest(
        user=user,
        catalog=catalog,
        peers=peers,
        num_recommendations=num_recommendations,
        random_factor=random_factor,
        metrics=metrics,
    )


def read_request(source: Union[str, Path, TextIO]) -> RecommendationRequest:
    if hasattr(source, "read"):
        return parse_request(source.read())
    return parse_request(Path(source).read_text(encoding="utf-8"))
