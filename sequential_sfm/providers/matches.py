"""Mini README: Pairwise putative or geometric matches.

Structure:
    * MatchesProvider - feature index pairs keyed by ``(view_i, view_j)``.
    * load_matches - try the explicit file, then ``matches.f.txt`` and
      ``matches.f.bin`` in the matches directory.

Text files hold repeated blocks::

    I J
    N
    i0 j0
    ...

Binary files hold the same integers as a little-endian ``uint32`` stream.
Pairs referencing views that are not in the scene are discarded.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from ..errors import ProviderError
from ..logging_utils import get_logger
from ..scene.model import Scene

LOGGER = get_logger(__name__)

DEFAULT_MATCH_FILENAMES = ("matches.f.txt", "matches.f.bin")

Pair = Tuple[int, int]


def _parse_blocks(values: np.ndarray) -> Dict[Pair, np.ndarray]:
    blocks: Dict[Pair, np.ndarray] = {}
    cursor = 0
    total = len(values)
    while cursor < total:
        if cursor + 3 > total:
            raise ValueError("truncated pair header")
        view_i, view_j, count = (int(value) for value in values[cursor:cursor + 3])
        cursor += 3
        end = cursor + 2 * count
        if end > total:
            raise ValueError(f"pair ({view_i}, {view_j}) declares {count} matches past end of file")
        blocks[(view_i, view_j)] = np.asarray(values[cursor:end], dtype=np.int64).reshape(count, 2)
        cursor = end
    return blocks


class MatchesProvider:
    """Feature correspondences between pairs of views."""

    def __init__(self) -> None:
        self.pairwise_matches: Dict[Pair, np.ndarray] = {}
        self.source: Optional[Path] = None

    def load(self, scene: Scene, path: Optional[Path]) -> bool:
        """Load ``path``; return ``False`` when it is missing or unreadable."""

        if not path:
            return False
        path = Path(path)
        if not path.is_file():
            LOGGER.debug("Match file %s does not exist", path)
            return False
        try:
            if path.suffix == ".bin":
                values = np.fromfile(path, dtype="<u4")
            else:
                tokens = path.read_text(encoding="utf-8").split()
                values = np.array([int(token) for token in tokens], dtype=np.int64)
            blocks = _parse_blocks(values)
        except (OSError, ValueError) as error:
            LOGGER.warning("Cannot read match file %s: %s", path, error)
            return False

        self.pairwise_matches = {
            pair: matches
            for pair, matches in blocks.items()
            if pair[0] in scene.views and pair[1] in scene.views
        }
        discarded = len(blocks) - len(self.pairwise_matches)
        if discarded:
            LOGGER.debug("Discarded %s pairs referencing unknown views", discarded)
        self.source = path
        LOGGER.info("Loaded %s matching pairs from %s", len(self.pairwise_matches), path)
        return True

    def pairs(self) -> Iterable[Pair]:
        return sorted(self.pairwise_matches)


def load_matches(
    scene: Scene, matches_directory: Path, match_file: Optional[Path] = None
) -> MatchesProvider:
    """Load the first readable candidate match file or raise ``ProviderError``."""

    provider = MatchesProvider()
    candidates = [match_file] + [Path(matches_directory) / name for name in DEFAULT_MATCH_FILENAMES]
    for candidate in candidates:
        if provider.load(scene, candidate):
            return provider
    raise ProviderError(f"Invalid matches file in {matches_directory}")
