"""Shared sync exceptions."""

from __future__ import annotations

from collections.abc import Mapping


class SyncError(Exception):
    """Base class for synchronization failures."""


class ArtifactWriteError(SyncError):
    """Raised after a pass when one or more artifacts could not be stored.

    The pass still attempts every other artifact before this is raised.
    """

    def __init__(self, failures: Mapping[str, OSError]):
        self.failures = dict(failures)
        paths = ", ".join(sorted(self.failures))
        super().__init__(f"Failed to write {len(self.failures)} artifact(s): {paths}")


class ConfigError(ValueError):
    """Raised when a configuration or provider manifest cannot be loaded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Invalid configuration in {source}: {reason}")
