"""Snapshot holder for watch-mode re-resolution.

A long-running build-watch process re-resolves the settings document
when it changes. ``LiveConfig`` keeps the current snapshot and swaps in
a new one only after it has been fully resolved, so consumers that
already hold a snapshot keep using it and a failed re-resolution leaves
the current snapshot in place.
"""

from pathlib import Path

from stylecfg.errors import ConfigError
from stylecfg.observability.logging import get_logger
from stylecfg.resolver.document import load_raw_config
from stylecfg.resolver.engine import ConfigResolver
from stylecfg.resolver.models import RawConfig, ResolvedConfig

logger = get_logger(__name__)


class LiveConfig:
    """Current resolved configuration of a long-running process."""

    def __init__(self, resolver: ConfigResolver, initial: RawConfig):
        """Resolve the initial document.

        Args:
            resolver: Resolver used for every (re-)resolution
            initial: First settings document; errors propagate
        """
        self._resolver = resolver
        self._current = resolver.resolve(initial)
        self._generation = 1

    @property
    def current(self) -> ResolvedConfig:
        """The latest successfully resolved snapshot."""
        return self._current

    @property
    def generation(self) -> int:
        """Number of snapshots produced so far."""
        return self._generation

    def refresh(self, raw: RawConfig) -> ResolvedConfig:
        """Resolve ``raw`` and make it the current snapshot.

        Raises:
            ConfigError: If resolution fails; the previous snapshot stays
                current
        """
        try:
            resolved = self._resolver.resolve(raw)
        except ConfigError as e:
            logger.warning(
                "config_refresh_rejected",
                field=e.field,
                error=e.message,
                generation=self._generation,
            )
            raise

        self._current = resolved
        self._generation += 1
        logger.info("config_refreshed", generation=self._generation)
        return resolved

    def refresh_from_file(self, path: Path) -> ResolvedConfig:
        """Re-read ``path`` and refresh from it."""
        return self.refresh(load_raw_config(path))
