"""Mini README: Turn an engine-produced scene into its canonical form.

Structure:
    * CanonicalMapping - old-to-new id tables produced along the way.
    * SceneCanonicalizer - filters, orders and renumbers a scene.

Canonicalisation runs in a fixed order because each step feeds the ids of
the next one:

    1. keep views whose pose and intrinsic both exist;
    2. rank the intrinsic ids they reference (ascending, gaps removed);
    3. sort the kept views by image path, ties by original view id;
    4. renumber views 0..N-1 in that order, pose id = view id;
    5. move each pose under its view's new id;
    6. move each used intrinsic under its rank;
    7. re-key landmark observations through the view table.

The input scene is left untouched and a new ``Scene`` is returned, so
callers replace their reference in one assignment. Observations of views
dropped in step 1 are either removed or rejected according to
``UnmappedObservationPolicy``; they are never re-keyed to a default id.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from ..configuration import UnmappedObservationPolicy
from ..errors import InconsistentSceneError
from ..logging_utils import get_logger
from .model import Landmark, Observation, Scene, View

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class CanonicalMapping:
    """Id translation tables from the original scene to the canonical one."""

    views: Dict[int, int] = field(default_factory=dict)
    intrinsics: Dict[int, int] = field(default_factory=dict)
    dropped_views: List[int] = field(default_factory=list)
    dropped_observations: int = 0

    def view_id(self, original_id: int) -> Optional[int]:
        return self.views.get(original_id)


def rank_ids(ids) -> Dict[int, int]:
    """Map each id to its position in ascending order."""

    return {original: rank for rank, original in enumerate(sorted(set(ids)))}


class SceneCanonicalizer:
    """Filter, order and densely renumber the entities of a scene."""

    def __init__(
        self,
        *,
        unmapped_policy: UnmappedObservationPolicy = UnmappedObservationPolicy.DROP,
    ) -> None:
        self.unmapped_policy = UnmappedObservationPolicy(unmapped_policy)
        self.last_mapping: Optional[CanonicalMapping] = None

    def canonicalize(self, scene: Scene) -> Scene:
        """Return the canonical form of ``scene``."""

        mapping = CanonicalMapping()
        valid_views: List[View] = []
        for view in scene.iter_views():
            if scene.is_pose_and_intrinsic_defined(view):
                valid_views.append(view)
            else:
                mapping.dropped_views.append(view.id_view)
        if mapping.dropped_views:
            LOGGER.info(
                "Dropping %s views without pose or intrinsic: %s",
                len(mapping.dropped_views),
                mapping.dropped_views,
            )

        mapping.intrinsics = rank_ids(view.id_intrinsic for view in valid_views)
        valid_views.sort(key=lambda view: (view.image_path, view.id_view))

        canonical = Scene(root_path=scene.root_path)
        for new_id, view in enumerate(valid_views):
            canonical.poses[new_id] = scene.poses[view.id_pose]
            canonical.views[new_id] = replace(
                view,
                id_view=new_id,
                id_pose=new_id,
                id_intrinsic=mapping.intrinsics[view.id_intrinsic],
            )
            mapping.views[view.id_view] = new_id

        for original_id, new_id in mapping.intrinsics.items():
            canonical.intrinsics[new_id] = scene.intrinsics[original_id]

        for landmark_id, landmark in scene.structure.items():
            canonical.structure[landmark_id] = Landmark(
                X=landmark.X,
                observations=self._remap_observations(landmark_id, landmark, mapping),
            )

        if mapping.dropped_observations:
            LOGGER.warning(
                "Dropped %s observations of views that were not reconstructed",
                mapping.dropped_observations,
            )
        LOGGER.info("Canonical scene: %s", canonical.summary())
        self.last_mapping = mapping
        return canonical

    def _remap_observations(
        self, landmark_id: int, landmark: Landmark, mapping: CanonicalMapping
    ) -> Dict[int, Observation]:
        observations: Dict[int, Observation] = {}
        for original_view, observation in landmark.observations.items():
            new_view = mapping.view_id(original_view)
            if new_view is None:
                if self.unmapped_policy is UnmappedObservationPolicy.REJECT:
                    raise InconsistentSceneError(
                        f"Landmark {landmark_id} is observed by view {original_view}, "
                        "which has no pose or intrinsic"
                    )
                mapping.dropped_observations += 1
                continue
            observations[new_view] = observation
        return observations


def canonicalize(
    scene: Scene,
    *,
    unmapped_policy: UnmappedObservationPolicy = UnmappedObservationPolicy.DROP,
) -> Scene:
    """Functional shortcut for ``SceneCanonicalizer(...).canonicalize(scene)``."""

    return SceneCanonicalizer(unmapped_policy=unmapped_policy).canonicalize(scene)
