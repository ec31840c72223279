"""Mini README: Scene graph package for sequential_sfm.

Groups the in-memory scene model, camera enumerations, JSON persistence,
the initial pair resolver and the canonicaliser. ``model`` holds the data
classes; the other modules operate on them.
"""

from .cameras import CameraModel, IntrinsicRefinement
from .canonicalizer import CanonicalMapping, SceneCanonicalizer, canonicalize
from .initial_pair import image_basename, resolve_initial_pair
from .io import SceneParts, dump_scene, load_scene, save_scene, scene_to_document
from .model import Intrinsic, Landmark, Observation, Pose, Scene, View

__all__ = [
    "CameraModel",
    "CanonicalMapping",
    "Intrinsic",
    "IntrinsicRefinement",
    "Landmark",
    "Observation",
    "Pose",
    "Scene",
    "SceneCanonicalizer",
    "SceneParts",
    "View",
    "canonicalize",
    "dump_scene",
    "image_basename",
    "load_scene",
    "resolve_initial_pair",
    "save_scene",
    "scene_to_document",
]
