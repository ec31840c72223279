"""Mini README: Orchestrates one incremental reconstruction run end to end.

Structure:
    * PipelineRequest - inputs collected from the command line.
    * PipelineResult - canonical scene, export outcomes and engine timing.
    * prepare_output_directory - create the output directory if needed.
    * run_pipeline - load, resolve, reconstruct, canonicalise and export.

Every stage blocks until it finishes and any ``SfMError`` aborts the run.
Two outcomes are deliberately not fatal: failing to create the output
directory is only logged, and export failures are reported in the result
(fatal only when ``strict_exports`` is enabled in the settings).
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Tuple

from .configuration import SfMSettings, get_settings
from .engine import ENGINES, ReconstructionEngine, ReconstructionOptions
from .errors import ExportError
from .export import ExportResult, SceneExporter
from .logging_utils import get_logger
from .providers import FeaturesProvider, load_matches, load_regions_type
from .scene import SceneCanonicalizer, SceneParts, load_scene, resolve_initial_pair
from .scene.cameras import IntrinsicRefinement
from .scene.model import Scene

LOGGER = get_logger(__name__)

PRECOMPUTED_SCENE_FILENAME = "sfm_data_reconstructed.json"


@dataclass(frozen=True, slots=True)
class PipelineRequest:
    """Paths and options for a single run."""

    input_file: Path
    matches_directory: Path
    output_directory: Path
    options: ReconstructionOptions = field(default_factory=ReconstructionOptions)
    match_file: Optional[Path] = None
    initial_pair_names: Optional[Tuple[str, str]] = None


@dataclass(slots=True)
class PipelineResult:
    """What a successful run produced."""

    scene: Scene
    exports: List[ExportResult]
    elapsed_seconds: float
    options: ReconstructionOptions

    @property
    def exports_succeeded(self) -> bool:
        return all(result.success for result in self.exports)


def prepare_output_directory(output_directory: Path) -> bool:
    """Create ``output_directory``; log and return ``False`` on failure."""

    output_directory = Path(output_directory)
    if output_directory.is_dir():
        return True
    try:
        output_directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        LOGGER.error("Cannot create the output directory %s: %s", output_directory, error)
        return False
    return True


def create_engine(settings: SfMSettings, matches_directory: Path) -> ReconstructionEngine:
    scene_path = settings.precomputed_scene or Path(matches_directory) / PRECOMPUTED_SCENE_FILENAME
    return ENGINES.create(settings.engine, scene_path=scene_path)


def run_pipeline(
    request: PipelineRequest,
    *,
    settings: Optional[SfMSettings] = None,
    engine: Optional[ReconstructionEngine] = None,
    exporter: Optional[SceneExporter] = None,
) -> PipelineResult:
    """Run every stage for ``request`` and return the exported canonical scene."""

    settings = settings or get_settings()
    options = request.options

    scene = load_scene(request.input_file, SceneParts.VIEWS | SceneParts.INTRINSICS)
    if options.use_pba and options.intrinsic_refinement.adjusts(IntrinsicRefinement.ADJUST_PRINCIPAL_POINT):
        LOGGER.warning("PBA can not adjust the principal point")

    regions_type = load_regions_type(request.matches_directory)
    features = FeaturesProvider().load(scene, request.matches_directory, regions_type)
    matches = load_matches(scene, request.matches_directory, request.match_file)

    prepare_output_directory(request.output_directory)

    if request.initial_pair_names is not None:
        options = replace(options, initial_pair=resolve_initial_pair(scene, request.initial_pair_names))

    engine = engine or create_engine(settings, request.matches_directory)
    LOGGER.info("Starting sequential reconstruction with %s", engine.metadata())
    started = time.perf_counter()
    reconstructed = engine.reconstruct(scene, features, matches, options)
    canonical = SceneCanonicalizer(unmapped_policy=settings.unmapped_observations).canonicalize(reconstructed)
    elapsed = time.perf_counter() - started
    LOGGER.info("Total reconstruction took (s): %.3f", elapsed)

    exports = (exporter or SceneExporter()).export_all(canonical, request.output_directory)
    result = PipelineResult(scene=canonical, exports=exports, elapsed_seconds=elapsed, options=options)
    if not result.exports_succeeded:
        failed = [export.artifact.value for export in exports if not export.success]
        if settings.strict_exports:
            raise ExportError(f"Failed to export {', '.join(failed)}")
        LOGGER.warning("Some artifacts were not written: %s", ", ".join(failed))
    return result
