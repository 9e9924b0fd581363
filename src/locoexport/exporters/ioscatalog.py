"""iOS string catalog (.xcstrings) export.

Fetches the vendor string catalog twice concurrently: once for app strings
and plurals (Localizable.xcstrings), once for plist strings
(InfoPlist.xcstrings). Before writing, every catalog is rewritten so Xcode
accepts it:

- locale keys are renamed to .lproj names (pt-BR -> pt, en-US -> en)
- locales the app has no .lproj directory for are dropped
- extractionState is set to manual so Xcode keeps the entries
- plist assets are copied to the Info.plist keys they feed

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from locoexport.client import LocoClient
from locoexport.constants import (
    BUNDLE_NAME_KEY,
    EXTRACTION_STATE_MANUAL,
    LPROJ_SUFFIX,
    MAX_BUNDLE_NAME_LENGTH,
    PARAM_FALLBACK,
    PARAM_FILTER,
    PARAM_INDEX,
    PATH_ALL_XCSTRINGS,
    PLIST_CATALOG_FILENAME,
    STRINGS_CATALOG_FILENAME,
    TAG_IOS_PLIST,
)
from locoexport.enums import Platform
from locoexport.errors import PayloadError
from locoexport.exporters.archive import write_json
from locoexport.exporters.results import ExportResult, ExportSummary, guarded, run_export_tasks
from locoexport.locale_utils import collapse_locales
from locoexport.tables import IOS_CATALOG_FILTERS, PLIST_ASSET_KEYS

__all__ = [
    "check_bundle_name",
    "export_ios_catalog",
    "rewrite_catalog",
    "write_catalog",
]

logger = logging.getLogger(__name__)


def check_bundle_name(localizations: Mapping[str, Any]) -> list[str]:
    """Warn about bundle names iOS will truncate or show blank.

    Returns:
        Locales whose value is empty or longer than MAX_BUNDLE_NAME_LENGTH
    """
    flagged: list[str] = []
    for locale, localization in localizations.items():
        unit = localization.get("stringUnit") if isinstance(localization, Mapping) else None
        if not isinstance(unit, Mapping):
            continue
        value = unit.get("value")
        text = value if isinstance(value, str) else ""
        if not text or len(text) > MAX_BUNDLE_NAME_LENGTH:
            logger.warning(
                "%s for %s has length %d (expected 1 to %d)",
                BUNDLE_NAME_KEY,
                locale,
                len(text),
                MAX_BUNDLE_NAME_LENGTH,
            )
            flagged.append(locale)
    return flagged


def _catalog_strings(catalog: Any) -> dict[str, Any]:
    if not isinstance(catalog, dict) or not isinstance(catalog.get("strings"), dict):
        msg = "expected a string catalog object with a 'strings' mapping"
        raise PayloadError(msg)
    strings = catalog["strings"]
    for asset_id, entry in strings.items():
        if not isinstance(entry, dict):
            msg = f"catalog entry for {asset_id!r} is not an object"
            raise PayloadError(msg)
        if not isinstance(entry.get("localizations", {}), dict):
            msg = f"catalog entry for {asset_id!r} has malformed localizations"
            raise PayloadError(msg)
    return strings


def rewrite_catalog(catalog: Any, base_dir: Path) -> dict[str, Any]:
    """Return a copy of a vendor catalog rewritten for Xcode.

    Args:
        catalog: Decoded all.xcstrings payload
        base_dir: Directory holding the .lproj directories

    Returns:
        Rewritten catalog; the input is not modified

    Raises:
        PayloadError: If the payload is not a string catalog
    """
    strings = _catalog_strings(catalog)
    source = catalog.get("sourceLanguage") or ""

    codes = [source] if source else []
    for entry in strings.values():
        codes.extend(entry.get("localizations", {}))
    names = collapse_locales(codes, Platform.IOS)

    available: dict[str, bool] = {}

    def has_lproj(name: str) -> bool:
        if name not in available:
            available[name] = (base_dir / f"{name}{LPROJ_SUFFIX}").is_dir()
            if not available[name]:
                logger.info("Skipping locale %s: no %s%s directory", name, name, LPROJ_SUFFIX)
        return available[name]

    rewritten: dict[str, Any] = {}
    for asset_id, entry in strings.items():
        new_entry = {**entry, "extractionState": EXTRACTION_STATE_MANUAL}
        if "localizations" in entry:
            localizations = {}
            for code, localization in entry["localizations"].items():
                name = names.get(code)
                if name is not None and has_lproj(name):
                    localizations[name] = localization
            new_entry["localizations"] = localizations

        for key in PLIST_ASSET_KEYS.get(asset_id, (asset_id,)):
            rewritten[key] = new_entry
            if key == BUNDLE_NAME_KEY:
                check_bundle_name(new_entry.get("localizations", {}))

    result = {**catalog, "strings": rewritten}
    if source:
        result["sourceLanguage"] = names.get(source, source)
    return result


def write_catalog(base_dir: Path, catalog: Any, *, plist: bool) -> int:
    """Rewrite a vendor catalog and write it next to the .lproj directories.

    Returns:
        Number of files written (always 1)

    Raises:
        PayloadError: If the payload is not a string catalog
        OSError: If the file cannot be written
    """
    filename = PLIST_CATALOG_FILENAME if plist else STRINGS_CATALOG_FILENAME
    out_path = base_dir / filename
    write_json(
        out_path,
        rewrite_catalog(catalog, base_dir),
        indent=2,
        separators=(",", " : "),
        sort_keys=True,
    )
    logger.info("Wrote %s", out_path)
    return 1


def _catalog_task(client: LocoClient, base_dir: Path, vendor_filter: str) -> ExportResult:
    params = {
        PARAM_FILTER: vendor_filter,
        PARAM_INDEX: "id",
        PARAM_FALLBACK: client.settings.fallback_locale,
    }
    return guarded(
        vendor_filter,
        lambda: client.get_json(PATH_ALL_XCSTRINGS, params),
        lambda catalog: write_catalog(base_dir, catalog, plist=vendor_filter == TAG_IOS_PLIST),
    )


def export_ios_catalog(client: LocoClient, base_dir: Path) -> ExportSummary:
    """Fetch and write the app and plist string catalogs concurrently.

    Raises:
        ExportError: After both tasks finished, if either failed
    """
    tasks = [
        functools.partial(_catalog_task, client, base_dir, vendor_filter)
        for vendor_filter in IOS_CATALOG_FILTERS
    ]
    return run_export_tasks(tasks, label="ioscat")
