"""Fallback chains between the project's locales.

For every non-source locale, computes the ordered list of other project
locales to try when a translation is missing, ending at the source locale.

Matching uses CLDR likely-subtags data from Babel to compare tags: a
candidate must share the language; a different (likely) script is a weak
match, a different region a close match. Ties go to the earlier candidate,
and when no candidate shares the language the first candidate (the source
locale) is the default, the same contract as a standard BCP-47 matcher.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError, get_global, parse_locale

from locoexport.constants import PATH_LOCALES
from locoexport.errors import LocaleParseError, LocoError, PayloadError
from locoexport.locale_utils import LocaleTag, get_babel_locale, parse_locale_code
from locoexport.models import VendorLocale

if TYPE_CHECKING:
    from locoexport.client import LocoClient

__all__ = [
    "fallback_chain",
    "fallback_chains",
    "fetch_fallback_chains",
    "format_chains",
    "locale_distance",
    "match_locale",
    "same_likely_region",
]

logger = logging.getLogger(__name__)

# Distance weights. A script difference usually means the text is unreadable,
# a region difference only changes spelling and vocabulary.
_SCRIPT_DISTANCE = 50
_REGION_DISTANCE = 4
_VARIANT_DISTANCE = 1


@functools.lru_cache(maxsize=256)
def _maximize(tag: LocaleTag) -> LocaleTag:
    """Fill in the likely script and region (zh-TW -> zh-Hant-TW)."""
    likely_subtags = get_global("likely_subtags")
    keys = [
        f"{tag.language}_{tag.script}_{tag.region}" if tag.script and tag.region else "",
        f"{tag.language}_{tag.region}" if tag.region else "",
        f"{tag.language}_{tag.script}" if tag.script else "",
        tag.language,
    ]
    for key in keys:
        if key and key in likely_subtags:
            _, region, script, _ = parse_locale(likely_subtags[key])[:4]
            return LocaleTag(
                language=tag.language,
                script=tag.script or script,
                region=tag.region or region,
                variant=tag.variant,
            )
    return tag


def same_likely_region(first: LocaleTag, second: LocaleTag) -> bool:
    """Check if both tags share language and likely region.

    A missing region is filled in from CLDR likely subtags, so "pt" and
    "pt-BR" describe the same locale while "pt" and "pt-PT" do not. Script
    is ignored.

    Example:
        >>> same_likely_region(parse_locale_code("en"), parse_locale_code("en-US"))
        True
    """
    if first.language != second.language:
        return False
    return _maximize(first).region == _maximize(second).region


def locale_distance(desired: LocaleTag, supported: LocaleTag) -> int | None:
    """Distance between two tags, or None when the languages differ.

    Example:
        >>> locale_distance(parse_locale_code("en-GB"), parse_locale_code("en-US"))
        4
        >>> locale_distance(parse_locale_code("en"), parse_locale_code("fr")) is None
        True
    """
    if desired.language != supported.language:
        return None
    full_desired = _maximize(desired)
    full_supported = _maximize(supported)
    distance = 0
    if full_desired.script != full_supported.script:
        distance += _SCRIPT_DISTANCE
    if full_desired.region != full_supported.region:
        distance += _REGION_DISTANCE
    if desired.variant != supported.variant:
        distance += _VARIANT_DISTANCE
    return distance


def match_locale(desired: LocaleTag, supported: Sequence[LocaleTag]) -> LocaleTag | None:
    """Pick the supported tag closest to desired.

    Returns the first supported tag (the default) when none shares the
    language, and None only when supported is empty.
    """
    if not supported:
        return None
    best: LocaleTag | None = None
    best_distance = 0
    for candidate in supported:
        distance = locale_distance(desired, candidate)
        if distance is not None and (best is None or distance < best_distance):
            best, best_distance = candidate, distance
    return best if best is not None else supported[0]


def fallback_chain(
    supported: Sequence[LocaleTag], target: LocaleTag, source: LocaleTag
) -> tuple[LocaleTag, ...]:
    """Compute the fallback chain for one target locale.

    Each step drops every candidate with the same language and likely region
    as the target or the previous match (so "pt" leaves with "pt-BR" and
    script variants go together), then matches the target against what is
    left. The chain ends when a match shares language and likely region with
    the source, or when no candidates remain.

    Args:
        supported: All project locales, source first
        target: Locale to compute the chain for
        source: Project source locale

    Returns:
        Chain of matched locales; never contains the target
    """
    chain: list[LocaleTag] = []
    remaining = [tag for tag in supported if not same_likely_region(tag, target)]
    while remaining:
        match = match_locale(target, remaining)
        if match is None:
            break
        chain.append(match)
        if same_likely_region(match, source):
            break
        remaining = [tag for tag in remaining if not same_likely_region(tag, match)]
    return tuple(chain)


def _describe(tag: LocaleTag) -> str:
    try:
        return get_babel_locale(tag.bcp47).english_name or tag.bcp47
    except (UnknownLocaleError, ValueError):
        return tag.bcp47


def fallback_chains(locales: Iterable[VendorLocale]) -> dict[str, tuple[str, ...]]:
    """Compute fallback chains for every non-source locale of a project.

    Locales that share language and likely region with the source (en for
    an en-US source) get no chain.

    Args:
        locales: Project locales as returned by the vendor

    Returns:
        Dict of BCP-47 locale -> chain of BCP-47 locales, in vendor order

    Raises:
        LocoError: If no locale is marked as the source
    """
    locales = list(locales)
    source_locale = next((loc for loc in locales if loc.source), None)
    if source_locale is None:
        msg = "no source locale in project locale list"
        raise LocoError(msg)

    try:
        source = parse_locale_code(source_locale.code)
    except LocaleParseError as e:
        msg = f"source locale cannot be parsed: {e}"
        raise LocoError(msg) from e

    # Source goes first so it is the matcher's default.
    supported = [source]
    for loc in locales:
        if loc.source:
            continue
        try:
            supported.append(parse_locale_code(loc.code))
        except LocaleParseError as e:
            logger.error("Skipping locale in fallback list: %s", e)

    chains: dict[str, tuple[str, ...]] = {}
    for tag in supported:
        if same_likely_region(tag, source):
            continue
        chain = fallback_chain(supported, tag, source)
        logger.debug("Fallback chain for %s (%s): %d locales", tag, _describe(tag), len(chain))
        chains[tag.bcp47] = tuple(match.bcp47 for match in chain)
    return chains


def fetch_fallback_chains(client: LocoClient) -> dict[str, tuple[str, ...]]:
    """Fetch the project locale list and compute every fallback chain.

    Raises:
        UpstreamError: If the request fails
        PayloadError: If the response is not a list of locales
        LocoError: If no source locale can be determined
    """
    payload = client.get_json(PATH_LOCALES)
    if not isinstance(payload, list):
        msg = f"expected a JSON list of locales, got {type(payload).__name__}"
        raise PayloadError(msg)
    return fallback_chains(VendorLocale.from_json(item) for item in payload)


def format_chains(chains: dict[str, tuple[str, ...]]) -> list[str]:
    """Render chains as 'locale: member-1, member-2' lines."""
    return [f"{locale}: {', '.join(chain)}" for locale, chain in chains.items()]
