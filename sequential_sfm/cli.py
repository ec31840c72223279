"""Mini README: Command line entry point for sequential reconstruction.

This module exposes a Typer command that validates the reconstruction
options, runs the pipeline and maps the outcome to a process exit status:
0 on success and 1 on any fatal error, usage errors included.

Usage:
    sfm-incremental -i sfm_data.json -m matches/ -o out/ [-a img1.jpg -b img2.jpg]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from .configuration import get_settings
from .engine import ReconstructionOptions
from .errors import SfMError
from .logging_utils import configure_root_logger, get_logger
from .pipeline import PipelineRequest, run_pipeline
from .scene.cameras import CameraModel, IntrinsicRefinement

LOGGER = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

CAMERA_MODEL_HELP = (
    "Camera model for views with unknown intrinsic: 1 pinhole, 2 pinhole radial 1, "
    "3 pinhole radial 3 (default), 4 pinhole radial 3 + tangential 2, "
    "5 pinhole fisheye, 6 pinhole radial 1 pba."
)
REFINEMENT_HELP = (
    "Intrinsic refinement: ADJUST_ALL (default), NONE, ADJUST_FOCAL_LENGTH, "
    "ADJUST_PRINCIPAL_POINT, ADJUST_DISTORTION; combine with '|', "
    "e.g. ADJUST_FOCAL_LENGTH|ADJUST_DISTORTION."
)

cli = typer.Typer(
    help="Sequential/incremental reconstruction: initial pair essential + resection.",
    add_completion=False,
)


@cli.command()
def reconstruct(
    input_file: Path = typer.Option(..., "--input-file", "-i", help="Path to a scene with views and intrinsics."),
    matchdir: Path = typer.Option(..., "--matchdir", "-m", help="Directory holding the features and matches."),
    outdir: str = typer.Option(..., "--outdir", "-o", help="Directory where the artifacts are written."),
    match_file: Optional[Path] = typer.Option(None, "--match-file", "-M", help="Match file to use."),
    initial_pair_a: str = typer.Option("", "--initial-pair-a", "-a", help="Filename of the first image (no path)."),
    initial_pair_b: str = typer.Option("", "--initial-pair-b", "-b", help="Filename of the second image (no path)."),
    camera_model: int = typer.Option(int(CameraModel.PINHOLE_RADIAL_K3), "--camera-model", "-c", help=CAMERA_MODEL_HELP),
    refine_intrinsics: str = typer.Option("ADJUST_ALL", "--refine-intrinsics", "-f", help=REFINEMENT_HELP),
    acransac_times: int = typer.Option(4096, "--acransac-times", "-A", min=1, help="Robust estimation iterations."),
    omit_angle_error: bool = typer.Option(False, "--omit-angle-error", "-e", help="Omit the angle error term."),
    pba: bool = typer.Option(False, "--pba", "-p", help="Enable PBA acceleration."),
    prior_usage: bool = typer.Option(False, "--prior-usage", "-P", help="Use motion priors (e.g. GPS positions)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Reconstruct, canonicalise and export a scene."""

    settings = get_settings()
    configure_root_logger(logging.DEBUG if verbose else settings.log_level)

    try:
        unknown_camera_model = CameraModel.from_value(camera_model)
        refinement = IntrinsicRefinement.from_str(refine_intrinsics)
    except SfMError as error:
        LOGGER.error("%s", error)
        raise typer.Exit(code=EXIT_FAILURE)

    if bool(initial_pair_a) != bool(initial_pair_b):
        LOGGER.error(
            "Both initial pair images must be given together (got a=%r, b=%r)",
            initial_pair_a,
            initial_pair_b,
        )
        raise typer.Exit(code=EXIT_FAILURE)
    if not outdir.strip():
        LOGGER.error("It is an invalid output directory")
        raise typer.Exit(code=EXIT_FAILURE)

    request = PipelineRequest(
        input_file=input_file,
        matches_directory=matchdir,
        output_directory=Path(outdir),
        match_file=match_file,
        initial_pair_names=(initial_pair_a, initial_pair_b) if initial_pair_a else None,
        options=ReconstructionOptions(
            unknown_camera_model=unknown_camera_model,
            intrinsic_refinement=refinement,
            use_motion_priors=prior_usage,
            omit_angle_error=omit_angle_error,
            robust_estimation_iterations=acransac_times,
            use_pba=pba,
        ),
    )
    try:
        result = run_pipeline(request, settings=settings)
    except SfMError as error:
        LOGGER.error("Reconstruction failed: %s", error)
        raise typer.Exit(code=EXIT_FAILURE)

    typer.echo(
        f"Reconstructed {len(result.scene.views)} views and {len(result.scene.structure)} landmarks "
        f"in {result.elapsed_seconds:.2f}s; artifacts in {request.output_directory}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command and return its exit status instead of exiting."""

    try:
        cli(args=argv, prog_name="sfm-incremental")
    except SystemExit as exit_request:
        return EXIT_FAILURE if exit_request.code else EXIT_SUCCESS
    return EXIT_SUCCESS
