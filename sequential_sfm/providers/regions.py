"""Mini README: Image describer metadata written next to the features.

``image_describer.json`` records which region type produced the features.
Its absence or an unreadable payload means the matches directory was not
produced by a compatible feature extraction step.
"""

from __future__ import annotations

import json
from pathlib import Path

from ..errors import ProviderError
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

IMAGE_DESCRIBER_FILENAME = "image_describer.json"


def load_regions_type(matches_directory: Path) -> str:
    """Return the region type name declared in ``image_describer.json``."""

    describer_path = Path(matches_directory) / IMAGE_DESCRIBER_FILENAME
    try:
        payload = json.loads(describer_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise ProviderError(f"Invalid: {describer_path} regions type file ({error})") from error

    regions_type = payload.get("regions_type") if isinstance(payload, dict) else None
    if isinstance(regions_type, dict):
        regions_type = regions_type.get("polymorphic_name")
    if not isinstance(regions_type, str) or not regions_type:
        raise ProviderError(f"Invalid: {describer_path} regions type file (no regions_type)")
    LOGGER.debug("Regions type %s read from %s", regions_type, describer_path)
    return regions_type
