"""i18next JSON export.

Writes one <locale>.json per project locale from the vendor's all-locales
i18next export. Python-style placeholders are converted to i18next syntax
by the vendor (printf=i18next).

Python 3.13+.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from locoexport.client import LocoClient
from locoexport.constants import (
    FORMAT_I18NEXT,
    PARAM_FALLBACK,
    PARAM_FILTER,
    PARAM_FORMAT,
    PARAM_PRINTF,
    PATH_ALL_JSON,
    PRINTF_I18NEXT,
)
from locoexport.enums import Platform
from locoexport.errors import LocoError, PayloadError
from locoexport.exporters.archive import write_json
from locoexport.locale_utils import collapse_locales, output_names

__all__ = ["export_i18next", "write_i18next"]

logger = logging.getLogger(__name__)


def export_i18next(client: LocoClient, out_dir: Path, tag: str = "") -> int:
    """Download all locales in i18next format and write one file per locale.

    Args:
        client: Loco client
        out_dir: Existing output directory
        tag: Vendor tag filter ('' for no filter)

    Returns:
        Number of files written

    Raises:
        UpstreamError: If the download fails
        PayloadError: If the payload is not the expected JSON structure
        LocoError: If the payload contains another project
        OSError: If a file cannot be written
    """
    params = {
        PARAM_FORMAT: FORMAT_I18NEXT,
        PARAM_FALLBACK: client.settings.fallback_locale,
        PARAM_PRINTF: PRINTF_I18NEXT,
    }
    if tag:
        params[PARAM_FILTER] = tag
    payload = client.get_json(PATH_ALL_JSON, params)
    return write_i18next(out_dir, payload, project=client.settings.project)


def _validate(payload: Any, project: str) -> dict[str, dict[str, Any]]:
    if not isinstance(payload, dict):
        msg = f"expected a JSON object of locales, got {type(payload).__name__}"
        raise PayloadError(msg)
    for locale, projects in payload.items():
        if not isinstance(projects, dict):
            msg = f"expected a JSON object of projects for {locale}"
            raise PayloadError(msg)
        for name in projects:
            if name != project:
                msg = f"got unexpected project in i18next response from loco: {name}"
                raise LocoError(msg)
    return payload


def write_i18next(out_dir: Path, payload: Any, *, project: str) -> int:
    """Write a decoded {locale: {project: data}} payload as <name>.json files.

    The whole payload is validated before anything is written. A locale
    whose language is unique in the payload is written without its region
    (en-US -> en.json); when the file name differs from the canonical form
    a second copy is written under the canonical name. Locales that cannot
    be parsed are skipped.

    Returns:
        Number of files written

    Raises:
        PayloadError: If the payload is not the expected JSON structure
        LocoError: If a project other than project is present
        OSError: If a file cannot be written
    """
    locales = _validate(payload, project)
    names = collapse_locales(locales, Platform.I18NEXT)

    written = 0
    for locale, projects in locales.items():
        if project not in projects:
            logger.warning("No %s data for locale %s", project, locale)
            continue
        name = names.get(locale)
        if name is None:
            continue
        for file_name in output_names(name):
            write_json(out_dir / f"{file_name}.json", projects[project])
            written += 1

    logger.info("Wrote %d i18next files to %s", written, out_dir)
    return written
