"""
Hybrid recommendation core.

The package provides utilities for:
    * scoring a catalog against a user's tag profile (cosine similarity plus
      optional view/engagement metrics),
    * aggregating peer likes into collaborative scores,
    * blending both rankings and mixing in a controlled random sample.

Everything runs in memory on already-validated inputs; ``protocol`` and
``output`` read and write the plain-text request and JSON result formats.
"""

from .pipeline import run_pipeline

__all__ = ["run_pipeline"]
