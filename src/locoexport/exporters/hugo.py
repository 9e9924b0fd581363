"""Hugo (go-i18n) YAML export.

The vendor's simple YAML export maps asset id -> text. go-i18n expects every
message to be a mapping of plural category -> text, so each value is wrapped
as {other: text}. Plural forms are not exported.

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from locoexport.client import LocoClient
from locoexport.constants import (
    FORMAT_YAML_SIMPLE,
    FORMAT_YML,
    PARAM_FALLBACK,
    PARAM_FILTER,
    PARAM_FORMAT,
    PARAM_INDEX,
    PATH_ARCHIVE_TEMPLATE,
)
from locoexport.enums import Platform
from locoexport.errors import PayloadError
from locoexport.exporters.archive import ArchiveMember, iter_archive, load_yaml_mapping, write_yaml
from locoexport.locale_utils import collapse_locales

__all__ = ["export_hugo", "hugo_locale", "write_hugo_archive"]

logger = logging.getLogger(__name__)


def hugo_locale(filename: str, project: str) -> str:
    """Extract the lowercased locale from a '<project>-<locale>.yml' member name.

    Example:
        >>> hugo_locale("hourglass-pt-BR.yml", "hourglass")
        'pt-br'
    """
    return PurePosixPath(filename).stem.removeprefix(f"{project}-").lower()


def export_hugo(client: LocoClient, out_dir: Path, tag: str = "") -> int:
    """Download the YAML archive and write one go-i18n file per locale.

    Args:
        client: Loco client
        out_dir: Existing output directory
        tag: Vendor tag filter ('' for no filter)

    Returns:
        Number of files written

    Raises:
        UpstreamError: If the download fails
        PayloadError: If the payload is not a zip archive
    """
    params = {
        PARAM_FORMAT: FORMAT_YAML_SIMPLE,
        PARAM_FALLBACK: client.settings.fallback_locale,
        PARAM_INDEX: "id",
    }
    if tag:
        params[PARAM_FILTER] = tag
    payload = client.get_bytes(PATH_ARCHIVE_TEMPLATE.format(format=FORMAT_YML), params)
    return write_hugo_archive(out_dir, payload, project=client.settings.project)


def write_hugo_archive(out_dir: Path, payload: bytes, *, project: str) -> int:
    """Write every YAML document of an archive as <name>.yaml.

    Documents that cannot be decoded or written are logged and skipped.

    Returns:
        Number of files written

    Raises:
        PayloadError: If the payload is not a zip archive
    """
    documents: dict[str, ArchiveMember] = {
        hugo_locale(member.path.name, project): member
        for member in iter_archive(payload, FORMAT_YML)
    }
    names = collapse_locales(documents, Platform.HUGO)

    written = 0
    for locale, member in documents.items():
        name = names.get(locale)
        if name is None:
            continue
        out_path = out_dir / f"{name}.yaml"
        try:
            translations = load_yaml_mapping(member.data, str(member.path))
            messages = {asset_id: {"other": text} for asset_id, text in translations.items()}
            write_yaml(out_path, messages)
        except PayloadError as e:
            logger.error("Skipping %s: %s", member.path, e)
            continue
        except OSError as e:
            logger.error("Error writing output file %s: %s", out_path, e)
            continue
        written += 1

    logger.info("Wrote %d Hugo translation files to %s", written, out_dir)
    return written
