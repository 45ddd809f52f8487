"""Deterministic identifiers for projects and solutions."""

from __future__ import annotations

import hashlib
from typing import Final, Protocol
import uuid


CSHARP_PROJECT_TYPE_ID: Final = "FAE04EC0-301F-11D3-BF4B-00C04F79EFBC"
"""Well-known project type id of a C# class library."""

PRIMARY_LANGUAGE_EXTENSION: Final = "cs"
UNIT_ID_SALT: Final = "salt"


class IdentifierGenerator(Protocol):
    """Protocol for deriving project and solution identifiers."""

    def unit_id(self, aggregate_name: str, unit_name: str) -> str:
        """Identifier of the project generated for a unit."""
        ...

    def aggregate_id(self, aggregate_name: str, language_extension: str) -> str:
        """Identifier used as the project type in solution entries."""
        ...


def digest_id(text: str) -> str:
    """Render the MD5 digest of `text` as a GUID string.

    The first three GUID fields are little-endian, matching how GUIDs are
    built from raw bytes by the tools that consume these files.
    """
    digest = hashlib.md5(text.encode("utf-8"), usedforsecurity=False).digest()
    return str(uuid.UUID(bytes_le=digest))


class HashIdentifierGenerator:
    """Identifier generator based on name digests.

    Pure: equal inputs produce equal ids across processes and runs.
    """

    def unit_id(self, aggregate_name: str, unit_name: str) -> str:
        return digest_id(f"{aggregate_name}{unit_name}{UNIT_ID_SALT}")

    def aggregate_id(self, aggregate_name: str, language_extension: str) -> str:
        if language_extension.lower().lstrip(".") == PRIMARY_LANGUAGE_EXTENSION:
            return CSHARP_PROJECT_TYPE_ID
        return digest_id(aggregate_name)
