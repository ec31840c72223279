"""Mini README: JSON persistence for scenes.

Structure:
    * SceneParts - flags selecting which sections are read or written.
    * *Record / SceneDocument - Pydantic models describing the on-disk shape.
    * load_scene - parse and validate a document into a ``Scene``.
    * scene_to_document / dump_scene / save_scene - the reverse direction.

A document holds up to four sections (``views``, ``intrinsics``,
``extrinsics``, ``structure``). Loading asks for the sections it needs and
fails with ``SceneFormatError`` if any of them is absent; sections that were
not asked for are ignored. Saving writes only the requested sections, which
is how the calibration-only and full exports differ.
"""

from __future__ import annotations

from enum import Flag
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import SceneFormatError
from ..logging_utils import get_logger
from ..utils.files import atomic_write_text
from .cameras import CameraModel
from .model import Intrinsic, Landmark, Observation, Pose, Scene, View

LOGGER = get_logger(__name__)

DOCUMENT_VERSION = "1"


class SceneParts(Flag):
    """Sections of a scene document."""

    VIEWS = 1
    EXTRINSICS = 2
    INTRINSICS = 4
    STRUCTURE = 8
    ALL = VIEWS | EXTRINSICS | INTRINSICS | STRUCTURE


class ViewRecord(BaseModel):
    id_view: int = Field(ge=0)
    filename: str
    id_pose: int = Field(ge=0)
    id_intrinsic: Optional[int] = None
    width: int = 0
    height: int = 0


class IntrinsicRecord(BaseModel):
    id: int = Field(ge=0)
    model: CameraModel
    width: int
    height: int
    focal_length: float
    principal_point: Tuple[float, float]
    distortion: List[float] = Field(default_factory=list)


class PoseRecord(BaseModel):
    id: int = Field(ge=0)
    rotation: List[List[float]]
    center: Tuple[float, float, float]

    @field_validator("rotation")
    @classmethod
    def _check_rotation_shape(cls, value: List[List[float]]) -> List[List[float]]:
        if len(value) != 3 or any(len(row) != 3 for row in value):
            raise ValueError("rotation must be a 3x3 matrix")
        return value


class ObservationRecord(BaseModel):
    id_view: int
    id_feat: int = -1
    x: Tuple[float, float]


class LandmarkRecord(BaseModel):
    id: int
    X: Tuple[float, float, float]
    observations: List[ObservationRecord] = Field(default_factory=list)


class SceneDocument(BaseModel):
    """Root of a serialised scene; absent sections are ``None``."""

    version: str = DOCUMENT_VERSION
    root_path: str = ""
    views: Optional[List[ViewRecord]] = None
    intrinsics: Optional[List[IntrinsicRecord]] = None
    extrinsics: Optional[List[PoseRecord]] = None
    structure: Optional[List[LandmarkRecord]] = None


_SECTION_NAMES = {
    SceneParts.VIEWS: "views",
    SceneParts.INTRINSICS: "intrinsics",
    SceneParts.EXTRINSICS: "extrinsics",
    SceneParts.STRUCTURE: "structure",
}


def _unique_keys(section: str, keys: List[int]) -> None:
    seen = set()
    for key in keys:
        if key in seen:
            raise SceneFormatError(f"Duplicate id {key} in section '{section}'")
        seen.add(key)


def document_to_scene(document: SceneDocument, parts: SceneParts = SceneParts.ALL) -> Scene:
    """Build a ``Scene`` from a validated document, keeping only ``parts``."""

    for part, name in _SECTION_NAMES.items():
        if part in parts and getattr(document, name) is None:
            raise SceneFormatError(f"Scene document has no '{name}' section")

    scene = Scene(root_path=document.root_path)
    if SceneParts.VIEWS in parts:
        _unique_keys("views", [record.id_view for record in document.views])
        for record in document.views:
            scene.views[record.id_view] = View(
                id_view=record.id_view,
                image_path=record.filename,
                id_pose=record.id_pose,
                id_intrinsic=record.id_intrinsic,
                width=record.width,
                height=record.height,
            )
    if SceneParts.INTRINSICS in parts:
        _unique_keys("intrinsics", [record.id for record in document.intrinsics])
        for record in document.intrinsics:
            scene.intrinsics[record.id] = Intrinsic(
                model=record.model,
                width=record.width,
                height=record.height,
                focal_length=record.focal_length,
                principal_point=tuple(record.principal_point),
                distortion=tuple(record.distortion),
            )
    if SceneParts.EXTRINSICS in parts:
        _unique_keys("extrinsics", [record.id for record in document.extrinsics])
        for record in document.extrinsics:
            scene.poses[record.id] = Pose(
                rotation=np.asarray(record.rotation, dtype=float),
                center=np.asarray(record.center, dtype=float),
            )
    if SceneParts.STRUCTURE in parts:
        _unique_keys("structure", [record.id for record in document.structure])
        for record in document.structure:
            observations: Dict[int, Observation] = {}
            for observation in record.observations:
                if observation.id_view in observations:
                    raise SceneFormatError(
                        f"Landmark {record.id} observes view {observation.id_view} twice"
                    )
                observations[observation.id_view] = Observation(
                    x=np.asarray(observation.x, dtype=float),
                    id_feat=observation.id_feat,
                )
            scene.structure[record.id] = Landmark(
                X=np.asarray(record.X, dtype=float), observations=observations
            )
    return scene


def read_document(path: Path) -> SceneDocument:
    """Parse and validate the scene document stored at ``path``."""

    path = Path(path)
    try:
        payload = path.read_text(encoding="utf-8")
    except OSError as error:
        raise SceneFormatError(f"The input scene file '{path}' cannot be read: {error}") from error
    try:
        document = SceneDocument.model_validate_json(payload)
    except ValidationError as error:
        raise SceneFormatError(f"The input scene file '{path}' is invalid: {error}") from error
    return document


def load_scene(path: Path, parts: SceneParts = SceneParts.ALL) -> Scene:
    """Read ``path`` and return the requested sections as a ``Scene``."""

    scene = document_to_scene(read_document(path), parts)
    LOGGER.info("Loaded scene %s: %s", path, scene.summary())
    return scene


def scene_to_document(scene: Scene, parts: SceneParts = SceneParts.ALL) -> SceneDocument:
    """Serialise the requested sections of ``scene``, ordered by id."""

    document = SceneDocument(root_path=scene.root_path)
    if SceneParts.VIEWS in parts:
        document.views = [
            ViewRecord(
                id_view=view.id_view,
                filename=view.image_path,
                id_pose=view.id_pose,
                id_intrinsic=view.id_intrinsic,
                width=view.width,
                height=view.height,
            )
            for view in scene.iter_views()
        ]
    if SceneParts.INTRINSICS in parts:
        document.intrinsics = [
            IntrinsicRecord(
                id=key,
                model=intrinsic.model,
                width=intrinsic.width,
                height=intrinsic.height,
                focal_length=intrinsic.focal_length,
                principal_point=intrinsic.principal_point,
                distortion=list(intrinsic.distortion),
            )
            for key, intrinsic in sorted(scene.intrinsics.items())
        ]
    if SceneParts.EXTRINSICS in parts:
        document.extrinsics = [
            PoseRecord(id=key, rotation=pose.rotation.tolist(), center=tuple(pose.center.tolist()))
            for key, pose in sorted(scene.poses.items())
        ]
    if SceneParts.STRUCTURE in parts:
        document.structure = [
            LandmarkRecord(
                id=key,
                X=tuple(landmark.X.tolist()),
                observations=[
                    ObservationRecord(
                        id_view=id_view,
                        id_feat=observation.id_feat,
                        x=tuple(observation.x.tolist()),
                    )
                    for id_view, observation in sorted(landmark.observations.items())
                ],
            )
            for key, landmark in sorted(scene.structure.items())
        ]
    return document


def dump_scene(scene: Scene, parts: SceneParts = SceneParts.ALL) -> str:
    """Return the JSON text for the requested sections."""

    return scene_to_document(scene, parts).model_dump_json(indent=2, exclude_none=True)


def save_scene(scene: Scene, path: Path, parts: SceneParts = SceneParts.ALL) -> Path:
    """Write the requested sections of ``scene`` to ``path`` atomically."""

    return atomic_write_text(Path(path), dump_scene(scene, parts))
