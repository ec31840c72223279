"""Mini README: Core package initializer for sequential_sfm.

The package finalises an incremental Structure-from-Motion run: it loads a
partial scene with its features and matches, hands them to a reconstruction
engine, canonicalises the resulting scene graph and exports it. Convenience
imports below expose the pieces most callers need without knowing the
module layout.
"""

from .logging_utils import get_logger
from .pipeline import PipelineRequest, PipelineResult, run_pipeline
from .scene import Scene, SceneCanonicalizer, canonicalize, resolve_initial_pair

__all__ = [
    "PipelineRequest",
    "PipelineResult",
    "Scene",
    "SceneCanonicalizer",
    "canonicalize",
    "get_logger",
    "resolve_initial_pair",
    "run_pipeline",
]
