"""Android XML resource export.

Downloads the Android archive and copies each strings.xml into the matching
res/values-<qualifier> directory. Only existing directories are written: a
missing directory means the app does not ship that locale.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from locoexport.client import LocoClient
from locoexport.constants import (
    ANDROID_STRINGS_FILENAME,
    ANDROID_VALUES_PREFIX,
    FORMAT_ANDROID,
    PARAM_FALLBACK,
    PARAM_FILTER,
    PARAM_FORMAT,
    PARAM_INDEX,
    PATH_ANDROID_ARCHIVE,
    TAG_MOBILE,
)
from locoexport.enums import Platform
from locoexport.errors import LocaleParseError
from locoexport.exporters.archive import ArchiveMember, iter_archive, write_bytes
from locoexport.locale_utils import canonical_locale, collapse_locales, normalize_locale

__all__ = ["export_android", "resource_locale", "write_android_archive"]

logger = logging.getLogger(__name__)

# values-pt-rBR, values-pt-BR, values-fr, values-zh-Hant, values-b+zh+Hant
_RESOURCE_DIR = re.compile(r"values-(b\+[A-Za-z0-9+]+|[a-z]{2,3}(?:-[A-Za-z0-9]+)*)")


def resource_locale(directory: str) -> str:
    """Extract the vendor locale from a values-* directory name.

    Returns '' for the default 'values' directory or an unrecognized name.

    Example:
        >>> resource_locale("values-pt-rBR")
        'pt-BR'
        >>> resource_locale("values")
        ''
    """
    match = _RESOURCE_DIR.fullmatch(directory)
    if match is None:
        return ""
    try:
        return canonical_locale(match[1])
    except LocaleParseError:
        return ""


def export_android(client: LocoClient, base_dir: Path, tag: str = TAG_MOBILE) -> int:
    """Download Android resources and write them under base_dir (a res/ directory).

    Args:
        client: Loco client
        base_dir: Existing Android res directory
        tag: Vendor tag filter ('' for no filter)

    Returns:
        Number of files written

    Raises:
        UpstreamError: If the download fails
        PayloadError: If the payload is not a zip archive
    """
    params = {
        PARAM_FORMAT: FORMAT_ANDROID,
        PARAM_FALLBACK: client.settings.fallback_locale,
        PARAM_INDEX: "id",
    }
    if tag:
        params[PARAM_FILTER] = tag
    payload = client.get_bytes(PATH_ANDROID_ARCHIVE, params)
    return write_android_archive(base_dir, payload)


def _candidate_dirs(member: ArchiveMember, locale: str, collapsed: dict[str, str]) -> list[str]:
    """Directory names to try for one resource file, most specific first."""
    candidates = [member.directory]
    if locale in collapsed:
        candidates.append(f"{ANDROID_VALUES_PREFIX}-{collapsed[locale]}")
        candidates.append(f"{ANDROID_VALUES_PREFIX}-{normalize_locale(locale, Platform.ANDROID)}")
    return list(dict.fromkeys(candidates))


def write_android_archive(base_dir: Path, payload: bytes) -> int:
    """Write every strings.xml of an archive into existing values directories.

    Each file goes to the first existing directory among: the directory name
    used in the archive, the collapsed Android qualifier (values-pl for a
    lone pl-PL), and the full qualifier (values-pt-rBR). Files with no
    existing directory are logged and skipped; write errors are logged and
    the remaining files are still written.

    Returns:
        Number of files written
    """
    members = list(iter_archive(payload, "xml"))
    locales = {member.path: resource_locale(member.directory) for member in members}
    collapsed = collapse_locales((loc for loc in locales.values() if loc), Platform.ANDROID)

    written = 0
    for member in members:
        candidates = _candidate_dirs(member, locales[member.path], collapsed)
        output_dir = next(
            (base_dir / name for name in candidates if (base_dir / name).is_dir()), None
        )
        if output_dir is None:
            logger.error(
                "Cannot find matching resource dir for %s (tried %s)",
                member.path,
                ", ".join(candidates),
            )
            continue
        try:
            write_bytes(output_dir / ANDROID_STRINGS_FILENAME, member.data)
        except OSError as e:
            logger.error("Error writing to file %s: %s", output_dir / ANDROID_STRINGS_FILENAME, e)
            continue
        written += 1

    logger.info("Wrote %d Android resource files to %s", written, base_dir)
    return written
