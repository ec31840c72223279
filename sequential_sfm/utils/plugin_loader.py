"""Mini README: Dynamic plugin loading helpers.

Structure:
    * load_entry_point_plugins - load objects advertised under an entry point group.

Third-party packages expose reconstruction engines under the
``sequential_sfm.engines`` group; the engine registry loads them lazily the
first time an unknown engine name is requested.
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import List

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

ENGINE_ENTRY_POINT_GROUP = "sequential_sfm.engines"


def load_entry_point_plugins(group: str = ENGINE_ENTRY_POINT_GROUP) -> List[object]:
    """Load and return the objects registered under ``group``."""

    loaded_plugins = []
    for entry_point in entry_points(group=group):
        try:
            plugin = entry_point.load()
        except Exception as exc:  # pragma: no cover - a broken plugin must not stop the run
            LOGGER.exception("Failed to load plugin '%s': %s", entry_point.name, exc)
            continue
        loaded_plugins.append(plugin)
        LOGGER.info("Loaded plugin '%s'", entry_point.name)
    return loaded_plugins
