from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


RANDOM_POOLS: Tuple[str, ...] = ("top", "tail")


@dataclass
class MetricsConfig:
    """How much popularity/engagement signal is added on top of tag similarity."""

    use_metrics: bool = False
    weight_views: float = 0.0
    weight_time: float = 0.0
    weight_tags: float = 1.0


@dataclass
class BlendWeights:
    """Weights used when merging the content and collaborative rankings."""

    content: float = 0.5
    collaborative: float = 0.5


@dataclass
class DiversityConfig:
    """Parameters for the randomized re-ranking step.

    ``random_pool="top"`` samples the random share from the guaranteed top
    slice (so it can repeat items already shown); ``"tail"`` samples from the
    entries ranked below it.
    """

    random_pool: str = "top"
    shuffle: bool = True
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.random_pool not in RANDOM_POOLS:
            raise ValueError(
                f"random_pool must be one of {RANDOM_POOLS}, got {self.random_pool!r}"
            )


@dataclass
class PipelineConfig:
    blend: BlendWeights = field(default_factory=BlendWeights)
    diversity: DiversityConfig = field(default_factory=DiversityConfig)
