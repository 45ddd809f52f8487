"""Artifact storage with idempotent-write helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from upath import UPath

from slnsync.log import get_logger


if TYPE_CHECKING:
    from upath.types import JoinablePathLike


logger = get_logger(__name__)


class ArtifactStore(Protocol):
    """Protocol for reading and writing generated artifacts."""

    def exists(self, path: str) -> bool:
        """Check whether an artifact (or directory) exists."""
        ...

    def read(self, path: str) -> str:
        """Read the full text of an artifact."""
        ...

    def write(self, path: str, text: str) -> None:
        """Replace the content of an artifact."""
        ...

    def create_directory(self, path: str) -> None:
        """Create a directory including parents."""
        ...


class UPathArtifactStore:
    """Artifact store on any filesystem supported by universal_pathlib.

    Text is encoded as UTF-8 and written byte for byte, so line endings
    and byte-order marks survive unchanged.
    """

    def __init__(self, root: JoinablePathLike | None = None):
        """Initialize the store.

        Args:
            root: Optional base location (e.g. 'memory://work'). Relative
                artifact paths are resolved against it.
        """
        self.root = UPath(root) if root is not None else None

    def _path(self, path: str) -> UPath:
        if self.root is None:
            return UPath(path)
        return self.root / path.lstrip("/")

    def exists(self, path: str) -> bool:
        return self._path(path).exists()

    def read(self, path: str) -> str:
        return self._path(path).read_bytes().decode("utf-8")

    def write(self, path: str, text: str) -> None:
        target = self._path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(text.encode("utf-8"))

    def create_directory(self, path: str) -> None:
        self._path(path).mkdir(parents=True, exist_ok=True)


def sync_file_if_changed(store: ArtifactStore, path: str, content: str) -> bool:
    """Write `content` to `path` unless the stored content is identical.

    Returns:
        True if the artifact was written
    """
    if store.exists(path) and store.read(path) == content:
        logger.debug("Artifact unchanged, skipping write", path=path)
        return False

    store.write(path, content)
    logger.info("Wrote artifact", path=path)
    return True
