"""gettext PO export.

Downloads the backend PO archive and writes each catalog to
<base>/<locale>/LC_MESSAGES/messages.po. When the gettext directory name is
not the canonical BCP-47 form of the locale (pt_BR, sr@latn), the catalog is
written a second time under the canonical name (pt-BR, sr-Latn) so that
consumers expecting either form find it.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path

from locoexport.client import LocoClient
from locoexport.constants import (
    PARAM_FALLBACK,
    PARAM_FILTER,
    PARAM_INDEX,
    PATH_PO_ARCHIVE,
    PO_DIR,
    PO_FILENAME,
    TAG_BACKEND,
)
from locoexport.enums import Platform
from locoexport.errors import LocaleParseError
from locoexport.exporters.archive import ArchiveMember, iter_archive, write_bytes
from locoexport.locale_utils import locale_from_path, normalize_locale, output_names

__all__ = ["export_po", "write_po_archive"]

logger = logging.getLogger(__name__)


def export_po(client: LocoClient, base_dir: Path, tag: str = TAG_BACKEND) -> int:
    """Download the PO archive and write it under base_dir.

    Args:
        client: Loco client
        base_dir: Existing translations directory
        tag: Vendor tag filter

    Returns:
        Number of files written

    Raises:
        UpstreamError: If the download fails
        PayloadError: If the payload is not a zip archive
        OSError: If a catalog could not be written
    """
    params = {
        PARAM_INDEX: "name",
        PARAM_FILTER: tag,
        PARAM_FALLBACK: client.settings.fallback_locale,
    }
    payload = client.get_bytes(PATH_PO_ARCHIVE, params)
    return write_po_archive(base_dir, payload)


def _vendor_locale(member: ArchiveMember) -> str:
    """Return the locale of a catalog at <...>/<locale>/LC_MESSAGES/<file>, or ''."""
    if member.directory != PO_DIR:
        return ""
    return locale_from_path(member.path.parent.as_posix())


def write_po_archive(base_dir: Path, payload: bytes) -> int:
    """Write every .po file of an archive into base_dir.

    Locales that cannot be parsed are logged and skipped. Write errors do not
    stop the remaining catalogs; the first one is raised at the end.

    Returns:
        Number of files written

    Raises:
        PayloadError: If the payload is not a zip archive
        OSError: The first write error, after all catalogs were attempted
    """
    written = 0
    first_error: OSError | None = None

    for member in iter_archive(payload, "po"):
        vendor_locale = _vendor_locale(member)
        if not vendor_locale:
            logger.error("Path for %s is not expected, skipping", member.path)
            continue
        try:
            name = normalize_locale(vendor_locale, Platform.GETTEXT)
        except LocaleParseError as e:
            logger.error("Skipping catalog %s: %s", member.path, e)
            continue

        for locale_name in output_names(name):
            po_dir = base_dir / locale_name / PO_DIR
            try:
                po_dir.mkdir(parents=True, exist_ok=True)
                write_bytes(po_dir / PO_FILENAME, member.data)
            except OSError as e:
                logger.error("Error writing catalog for %s: %s", locale_name, e)
                first_error = first_error or e
                continue
            written += 1

    logger.info("Wrote %d PO catalogs to %s", written, base_dir)
    if first_error is not None:
        raise first_error
    return written
