"""Mini README: Engine registry enabling pluggable reconstruction back-ends.

Structure:
    * EngineRegistry - maps engine identifiers to ``ReconstructionEngine``
      subclasses and instantiates them.

Built-in engines register on import. Engines shipped by other packages are
advertised under the ``sequential_sfm.engines`` entry point group and loaded
the first time an unknown identifier is requested.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Type

from ..errors import NotFoundError
from ..logging_utils import get_logger
from ..utils.plugin_loader import load_entry_point_plugins
from .base import ReconstructionEngine

LOGGER = get_logger(__name__)


class EngineRegistry:
    """Simple registry for mapping engine identifiers to classes."""

    def __init__(
        self,
        plugin_loader: Callable[[], Iterable[object]] = load_entry_point_plugins,
    ) -> None:
        self._engines: Dict[str, Type[ReconstructionEngine]] = {}
        self._plugin_loader = plugin_loader
        self._plugins_loaded = False

    def register(self, engine: Type[ReconstructionEngine]) -> Type[ReconstructionEngine]:
        """Register an engine class; usable as a class decorator."""

        identifier = engine.engine_name.lower()
        LOGGER.debug("Registering engine '%s'", identifier)
        self._engines[identifier] = engine
        return engine

    def _load_plugins(self) -> None:
        if self._plugins_loaded:
            return
        self._plugins_loaded = True
        for plugin in self._plugin_loader():
            if isinstance(plugin, type) and issubclass(plugin, ReconstructionEngine):
                self.register(plugin)
            else:
                LOGGER.warning("Ignoring plugin %r: not a ReconstructionEngine subclass", plugin)

    def available_engines(self) -> List[str]:
        """Return engine identifiers, sorted for display."""

        self._load_plugins()
        return sorted(self._engines.keys())

    def create(self, identifier: str, **engine_settings: object) -> ReconstructionEngine:
        """Instantiate the engine registered under ``identifier``."""

        engine_cls = self._engines.get(identifier.lower())
        if engine_cls is None:
            self._load_plugins()
            engine_cls = self._engines.get(identifier.lower())
        if engine_cls is None:
            raise NotFoundError(f"Unknown reconstruction engine '{identifier}'")
        LOGGER.info("Creating engine '%s'", identifier)
        return engine_cls(**engine_settings)


ENGINES = EngineRegistry()
