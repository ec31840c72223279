"""Mini README: Resolve user supplied image names to an initial view pair.

Structure:
    * image_basename - filename component of a stored image path.
    * resolve_initial_pair - map two basenames to their view ids.

Views are scanned in ascending id order. When several views share a
basename the last one scanned wins; this mirrors the established behaviour
and is logged at DEBUG level so collisions remain visible.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from ..errors import InvalidInputError, NotFoundError
from ..logging_utils import get_logger
from .model import Scene

LOGGER = get_logger(__name__)


def image_basename(image_path: str) -> str:
    """Return the filename part of ``image_path`` for ``/`` or ``\\`` separators."""

    return re.split(r"[\\/]", image_path)[-1]


def resolve_initial_pair(scene: Scene, names: Tuple[str, str]) -> Tuple[int, int]:
    """Return the ``(first, second)`` view ids whose image basenames equal ``names``."""

    first_name, second_name = names
    if first_name == second_name:
        raise InvalidInputError(
            f"Invalid image names <{first_name}, {second_name}>: "
            "the same image cannot initialise a pair"
        )

    first: Optional[int] = None
    second: Optional[int] = None
    for view in scene.iter_views():
        filename = image_basename(view.image_path)
        if filename == first_name:
            if first is not None:
                LOGGER.debug("View %s overrides view %s for '%s'", view.id_view, first, filename)
            first = view.id_view
        elif filename == second_name:
            if second is not None:
                LOGGER.debug("View %s overrides view %s for '%s'", view.id_view, second, filename)
            second = view.id_view

    if first is None or second is None:
        raise NotFoundError(
            f"Could not find the initial pair <{first_name}, {second_name}>"
        )
    LOGGER.info("Initial pair <%s, %s> resolved to views (%s, %s)", first_name, second_name, first, second)
    return first, second
