"""Archive reading and output writing helpers shared by the exporters.

Python 3.13+.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from locoexport.constants import MAX_ARCHIVE_MEMBER_SIZE
from locoexport.errors import PayloadError

__all__ = [
    "ArchiveMember",
    "iter_archive",
    "load_yaml_mapping",
    "write_bytes",
    "write_json",
    "write_yaml",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ArchiveMember:
    """One file extracted from a vendor export archive.

    Attributes:
        path: Path inside the archive
        data: File contents (at most MAX_ARCHIVE_MEMBER_SIZE bytes)
    """

    path: PurePosixPath
    data: bytes

    @property
    def directory(self) -> str:
        """Name of the directory containing the file ('' at archive root)."""
        return self.path.parent.name

    @property
    def suffix(self) -> str:
        """File extension without the leading dot."""
        return self.path.suffix.removeprefix(".")


def iter_archive(payload: bytes, suffix: str) -> Iterator[ArchiveMember]:
    """Yield archive members with the given extension.

    Members that cannot be read are logged and skipped. Members larger than
    MAX_ARCHIVE_MEMBER_SIZE are truncated to that size with a warning.

    Args:
        payload: Zip archive bytes
        suffix: File extension to keep, without the dot (e.g., 'po')

    Raises:
        PayloadError: If payload is not a zip archive
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(payload))
    except zipfile.BadZipFile as e:
        msg = f"zip archive cannot be opened: {e}"
        raise PayloadError(msg) from e

    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            path = PurePosixPath(info.filename)
            if path.suffix != f".{suffix}":
                logger.debug("Skipping %s", info.filename)
                continue
            if info.file_size > MAX_ARCHIVE_MEMBER_SIZE:
                logger.warning(
                    "Truncating %s to %d bytes (%d bytes in archive)",
                    info.filename,
                    MAX_ARCHIVE_MEMBER_SIZE,
                    info.file_size,
                )
            try:
                with archive.open(info) as member:
                    data = member.read(MAX_ARCHIVE_MEMBER_SIZE)
            except (zipfile.BadZipFile, OSError) as e:
                logger.error("Error reading zip data for file %s: %s", info.filename, e)
                continue
            yield ArchiveMember(path=path, data=data)


def load_yaml_mapping(data: bytes, source: str) -> dict[str, str]:
    """Decode a flat YAML mapping of asset id -> translation.

    Every scalar is kept as written: BaseLoader does not resolve YAML 1.1
    booleans or numbers, so "No" stays "No" and "1.10" stays "1.10".

    Raises:
        PayloadError: If data is not YAML or not a mapping
    """
    try:
        loaded = yaml.load(data, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        msg = f"error unmarshalling yaml in {source}: {e}"
        raise PayloadError(msg) from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        msg = f"expected a YAML mapping in {source}, got {type(loaded).__name__}"
        raise PayloadError(msg)
    return {str(k): "" if v is None else str(v) for k, v in loaded.items()}


def write_bytes(path: Path, data: bytes) -> None:
    """Write raw bytes, replacing any existing file."""
    path.write_bytes(data)
    logger.debug("Wrote %s (%d bytes)", path, len(data))


def write_json(path: Path, data: Any, **dump_options: Any) -> None:
    """Write data as UTF-8 JSON followed by a newline."""
    with path.open("w", encoding="utf-8") as out:
        json.dump(data, out, ensure_ascii=False, **dump_options)
        out.write("\n")
    logger.debug("Wrote %s", path)


def write_yaml(path: Path, data: Any) -> None:
    """Write data as UTF-8 block-style YAML."""
    with path.open("w", encoding="utf-8") as out:
        yaml.safe_dump(data, out, allow_unicode=True, default_flow_style=False)
    logger.debug("Wrote %s", path)
