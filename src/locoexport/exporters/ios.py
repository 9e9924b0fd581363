"""iOS .strings/.stringsdict/InfoPlist.strings export.

Fetches three archives concurrently, one per vendor tag, and copies their
contents into existing <locale>.lproj directories. The plist archive is
YAML keyed by asset id and is rewritten into InfoPlist.strings using the
plist key table.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from pathlib import Path, PurePosixPath

from locoexport.client import LocoClient
from locoexport.constants import (
    FORMAT_YML,
    LPROJ_SUFFIX,
    PARAM_FALLBACK,
    PARAM_FILTER,
    PARAM_INDEX,
    PATH_ARCHIVE_TEMPLATE,
    PLIST_STRINGS_FILENAME,
)
from locoexport.enums import Platform
from locoexport.errors import PayloadError
from locoexport.exporters.archive import iter_archive, load_yaml_mapping, write_bytes
from locoexport.exporters.results import ExportResult, ExportSummary, guarded, run_export_tasks
from locoexport.locale_utils import collapse_locales
from locoexport.tables import IOS_LEGACY_FILTERS, PLIST_ASSET_KEYS

__all__ = ["export_ios", "lproj_locale", "plist_strings", "write_ios_archive"]

logger = logging.getLogger(__name__)

_STRINGS_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n"})


def lproj_locale(directory: str) -> str:
    """Return the locale of an <locale>.lproj directory name ('' if none)."""
    return PurePosixPath(directory).stem if directory else ""


def plist_strings(translations: Mapping[str, str]) -> str:
    """Render asset translations as InfoPlist.strings lines.

    Each asset is written once per plist key it maps to. Assets missing from
    the plist key table are logged and dropped.

    Example:
        >>> plist_strings({"mobile.camera.usage": 'Use the "camera"'})
        '"NSCameraUsageDescription" = "Use the \\\\"camera\\\\"";\\n'
    """
    lines: list[str] = []
    for asset_id, text in translations.items():
        keys = PLIST_ASSET_KEYS.get(asset_id)
        if not keys:
            logger.error("Asset %s not found in plist map", asset_id)
            continue
        value = text.translate(_STRINGS_ESCAPES)
        lines.extend(f'"{key}" = "{value}";\n' for key in keys)
    return "".join(lines)


def write_ios_archive(base_dir: Path, payload: bytes, archive_format: str) -> int:
    """Write one iOS archive into existing .lproj directories.

    Args:
        base_dir: Directory holding the .lproj directories
        payload: Zip archive bytes
        archive_format: 'strings', 'stringsdict' or 'yml'

    Returns:
        Number of files written

    Raises:
        PayloadError: If the payload is not a zip archive
    """
    members = list(iter_archive(payload, archive_format))
    locales = {member.path: lproj_locale(member.directory) for member in members}
    names = collapse_locales((loc for loc in locales.values() if loc), Platform.IOS)

    written = 0
    for member in members:
        locale = locales[member.path]
        if not locale:
            logger.error("Cannot find locale for %s", member.path)
            continue
        name = names.get(locale)
        if name is None:
            continue
        output_dir = base_dir / f"{name}{LPROJ_SUFFIX}"
        if not output_dir.is_dir():
            logger.error("Cannot find output directory %s", output_dir)
            continue

        if archive_format == FORMAT_YML:
            out_path = output_dir / PLIST_STRINGS_FILENAME
            try:
                data = plist_strings(load_yaml_mapping(member.data, str(member.path))).encode()
            except PayloadError as e:
                logger.error("Skipping %s: %s", member.path, e)
                continue
        else:
            out_path = output_dir / member.path.name
            data = member.data

        try:
            write_bytes(out_path, data)
        except OSError as e:
            logger.error("Error writing to file %s: %s", out_path, e)
            continue
        written += 1

    logger.info("Wrote %d %s files to %s", written, archive_format, base_dir)
    return written


def _ios_task(client: LocoClient, base_dir: Path, tag: str, archive_format: str) -> ExportResult:
    params = {
        PARAM_FILTER: tag,
        PARAM_INDEX: "id",
        PARAM_FALLBACK: client.settings.fallback_locale,
    }
    path = PATH_ARCHIVE_TEMPLATE.format(format=archive_format)
    return guarded(
        tag,
        lambda: client.get_bytes(path, params),
        lambda payload: write_ios_archive(base_dir, payload, archive_format),
    )


def export_ios(client: LocoClient, base_dir: Path) -> ExportSummary:
    """Fetch the strings, stringsdict and plist archives concurrently.

    Args:
        client: Loco client
        base_dir: Existing directory holding the .lproj directories

    Returns:
        Summary of the three tasks

    Raises:
        ExportError: After all tasks finished, if any fetch or write failed
    """
    tasks = [
        functools.partial(_ios_task, client, base_dir, tag, archive_format)
        for tag, archive_format in IOS_LEGACY_FILTERS.items()
    ]
    return run_export_tasks(tasks, label="ios")
