"""Mini README: Loaders for the data the reconstruction engine consumes.

``regions`` validates the image describer metadata, ``features`` reads the
per-view keypoints and ``matches`` reads pairwise correspondences with the
conventional fallback filenames.
"""

from .features import FeaturesProvider
from .matches import DEFAULT_MATCH_FILENAMES, MatchesProvider, load_matches
from .regions import IMAGE_DESCRIBER_FILENAME, load_regions_type

__all__ = [
    "DEFAULT_MATCH_FILENAMES",
    "FeaturesProvider",
    "IMAGE_DESCRIBER_FILENAME",
    "MatchesProvider",
    "load_matches",
    "load_regions_type",
]
