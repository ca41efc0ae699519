import logging
from collections.abc import Mapping

from domain.constants.currency import DEFAULT_SOURCE
from domain.exceptions.currency import UnknownSourceError
from infrastructure.providers.base import RateSource

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Maps case-insensitive source names to rate sources. Read-only after construction."""

    def __init__(self, sources: Mapping[str, RateSource], default: str = DEFAULT_SOURCE):
        self._names = {self._normalize(name): name for name in sources}
        self._sources = {self._normalize(name): source for name, source in sources.items()}
        self._default = self._normalize(default)

        if self._default not in self._sources:
            raise UnknownSourceError(default)

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().casefold()

    @property
    def default_name(self) -> str:
        return self._names[self._default]

    def resolve(self, name: str | None = None) -> RateSource:
        if name is None or not name.strip():
            return self._sources[self._default]

        try:
            return self._sources[self._normalize(name)]
        except KeyError:
            raise UnknownSourceError(name.strip()) from None

    def list_available(self) -> set[str]:
        return set(self._names.values())

    def items(self) -> list[tuple[str, RateSource]]:
        return [(self._names[key], source) for key, source in self._sources.items()]

    async def close(self) -> None:
        for name, source in self.items():
            logger.debug(f"Closing source {name}")
            await source.close()
