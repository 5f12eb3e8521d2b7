from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .blending import combine_recommendations, get_randomized_recommendations
from .collaborative import recommend_collaborative
from .config import RANDOM_POOLS, BlendWeights, DiversityConfig, PipelineConfig
from .content import recommend_content_based
from .models import DuplicateItemError, ScoredEntry
from .output import dumps, to_frame, write_csv
from .protocol import ProtocolError, RecommendationRequest, read_request

LOGGER = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def run_pipeline(
    request: RecommendationRequest,
    config: Optional[PipelineConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[ScoredEntry]:
    config = config or PipelineConfig()
    if rng is None:
        rng = np.random.default_rng(config.diversity.seed)

    content_recs = recommend_content_based(request.user, request.catalog, request.metrics)
    collab_recs = recommend_collaborative(request.peers)
    combined = combine_recommendations(
        content_recs,
        collab_recs,
        content_weight=config.blend.content,
        collab_weight=config.blend.collaborative,
    )
    final_recs = get_randomized_recommendations(
        combined,
        request.num_recommendations,
        request.random_factor,
        rng=rng,
        random_pool=config.diversity.random_pool,
        shuffle=config.diversity.shuffle,
    )
    LOGGER.info(
        "Recommendations: content=%d collaborative=%d combined=%d returned=%d",
        len(content_recs),
        len(collab_recs),
        len(combined),
        len(final_recs),
    )
    return final_recs


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Blend tag-similarity and peer-based scores into a diversified recommendation list."
    )
    parser.add_argument("--input", type=str, default="", help="Request file. Reads stdin when omitted.")
    parser.add_argument("--output", type=str, default="", help="Where to write results. Writes stdout when omitted.")
    parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format.")
    parser.add_argument("--content-weight", type=float, default=0.5, help="Weight of the content-based score.")
    parser.add_argument("--collab-weight", type=float, default=0.5, help="Weight of the collaborative score.")
    parser.add_argument(
        "--random-pool",
        choices=list(RANDOM_POOLS),
        default="top",
        help="Draw random picks from the top slice or from the entries ranked below it.",
    )
    parser.add_argument("--no-shuffle", action="store_true", help="Keep the final list in rank order.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the randomized re-ranking.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level written to stderr.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = PipelineConfig(
        blend=BlendWeights(content=args.content_weight, collaborative=args.collab_weight),
        diversity=DiversityConfig(
            random_pool=args.random_pool,
            shuffle=not args.no_shuffle,
            seed=args.seed,
        ),
    )
    try:
        request = read_request(args.input if args.input else sys.stdin)
        final_recs = run_pipeline(request, config)
    except (ProtocolError, DuplicateItemError) as exc:
        LOGGER.error("Invalid request: %s", exc)
        raise SystemExit(2) from exc

    if args.format == "csv":
        if not args.output:
            sys.stdout.write(to_frame(final_recs).to_csv(index=False))
            return
        path = write_csv(final_recs, args.output)
        LOGGER.info("Recommendations saved to: %s", path.resolve())
        return

    text = dumps(final_recs) + "\n"
    if args.output:
        path = Path(args.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        LOGGER.info("Recommendations saved to: %s", path.resolve())
    else:
        sys.stdout.write(text)


if __name__ == "__main__":
    main()
