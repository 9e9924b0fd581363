"""Placeholder format conversion for a single asset.

Rewrites every translation of an asset from Python named placeholders
('%(name)s') to i18next placeholders ('{{name}}') on the vendor side, then
marks the asset's printf format as i18next.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING

from locoexport.client import escape_path
from locoexport.constants import (
    PATH_ASSET_JSON,
    PATH_TRANSLATION,
    PATH_TRANSLATIONS_JSON,
    PRINTF_I18NEXT,
)
from locoexport.errors import LocoError, PayloadError, UpstreamError
from locoexport.models import VendorTranslation

if TYPE_CHECKING:
    from locoexport.client import LocoClient

__all__ = [
    "convert_asset_format",
    "fetch_translations",
    "parse_format_key",
    "python_to_i18next",
]

logger = logging.getLogger(__name__)

_FORMAT_KEY = re.compile(r"%\(([\w-]+)\)s")


def parse_format_key(asset_id: str) -> str:
    """Return the first named placeholder in an asset id, or ''.

    Example:
        >>> parse_format_key("import.drop-here %(filename)s")
        'filename'
    """
    match = _FORMAT_KEY.search(asset_id)
    return match[1] if match else ""


def python_to_i18next(text: str, format_key: str) -> str:
    """Replace every '%(format_key)s' with '{{format_key}}'.

    Example:
        >>> python_to_i18next("Hello %(name)s!", "name")
        'Hello {{name}}!'
    """
    if not format_key:
        return text
    return text.replace(f"%({format_key})s", f"{{{{{format_key}}}}}")


def fetch_translations(client: LocoClient, asset_id: str) -> list[VendorTranslation]:
    """Fetch every locale's translation of an asset.

    Raises:
        UpstreamError: If the request fails
        PayloadError: If the response is not a list of translations
    """
    payload = client.get_json(PATH_TRANSLATIONS_JSON.format(asset=escape_path(asset_id)))
    if not isinstance(payload, list):
        msg = f"expected a JSON list of translations, got {type(payload).__name__}"
        raise PayloadError(msg)
    return [VendorTranslation.from_json(item) for item in payload]


def convert_asset_format(client: LocoClient, asset_id: str, format_key: str = "") -> int:
    """Convert an asset's translations to i18next placeholders.

    Untranslated entries and entries the conversion does not change are
    skipped. A failed write is logged and the remaining locales are still
    converted. The asset's printf format is updated only if at least one
    translation was written.

    Args:
        client: Loco client; the API key needs write access
        asset_id: Vendor asset id
        format_key: Placeholder name; parsed from asset_id when empty

    Returns:
        Number of translations updated

    Raises:
        LocoError: If no format key is given or found in the asset id
        UpstreamError: If the translations cannot be fetched
        PayloadError: If the translations response is malformed
    """
    format_key = format_key or parse_format_key(asset_id)
    if not format_key:
        msg = f"couldn't determine format key for asset {asset_id!r}"
        raise LocoError(msg)

    escaped_id = escape_path(asset_id)
    updated = 0
    for translation in fetch_translations(client, asset_id):
        if not translation.translated:
            continue
        converted = python_to_i18next(translation.translation, format_key)
        if not converted or converted == translation.translation:
            logger.warning(
                "Could not create translation for %s: %r", translation.locale.code, converted
            )
            continue

        locale_id = escape_path(translation.locale.code)
        path = PATH_TRANSLATION.format(asset=escaped_id, locale=locale_id)
        try:
            client.write(path, "POST", converted.encode())
        except UpstreamError as e:
            logger.error("Failed to write translation for %s: %s", translation.locale.code, e)
            continue
        logger.debug("Updated %s (%s)", translation.locale.code, translation.locale.name)
        updated += 1

    if updated:
        body = json.dumps({"printf": PRINTF_I18NEXT}).encode()
        try:
            client.write(
                PATH_ASSET_JSON.format(asset=escaped_id),
                "PATCH",
                body,
                content_type="application/json",
            )
        except UpstreamError as e:
            logger.error("Failed to update asset printf for %s: %s", asset_id, e)

    logger.info("Updated %d translations of %s", updated, asset_id)
    return updated
