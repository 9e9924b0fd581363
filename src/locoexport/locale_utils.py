"""Locale utilities: vendor locale codes to platform locale names.

Centralizes locale parsing and per-platform rendering used by every exporter.
Each incoming code is parsed once into a LocaleTag (language, script, region,
variant); platform names are rendered from that structure instead of being
rewritten with ad hoc string operations.

Rendering rules:
    android  - en, en-rUS, b+zh+Hant, legacy Java codes (id -> in)
    ios      - BCP-47 pass-through (pt-PT, zh-Hans)
    gettext  - POSIX form with script modifier (pt_BR, sr@latn)
    i18next  - BCP-47 pass-through
    hugo     - BCP-47, lowercased (pt-br)

A per-platform override table is consulted before any parsing.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from babel.core import parse_locale

from locoexport.enums import Platform
from locoexport.errors import LocaleParseError
from locoexport.tables import ANDROID_LEGACY_LANGUAGES, LOCALE_OVERRIDES

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "LocaleTag",
    "canonical_locale",
    "collapse_locales",
    "get_babel_locale",
    "locale_from_path",
    "normalize_locale",
    "output_names",
    "parse_locale_code",
    "render_locale",
]

logger = logging.getLogger(__name__)

# Android region qualifier inside a resource directory name: en-rUS
_ANDROID_REGION = re.compile(r"r([A-Z]{2})")

# gettext spells some scripts out in the @modifier
_SCRIPT_MODIFIERS = {"latin": "Latn", "cyrillic": "Cyrl"}


@dataclass(frozen=True, slots=True)
class LocaleTag:
    """Structured locale identifier.

    Attributes:
        language: Lowercase ISO 639 language code (e.g., 'pt')
        script: Title-case ISO 15924 script code (e.g., 'Latn'), or None
        region: Uppercase ISO 3166 or UN M.49 region (e.g., 'BR', '419'), or None
        variant: Lowercase variant subtag (e.g., 'valencia'), or None
    """

    language: str
    script: str | None = None
    region: str | None = None
    variant: str | None = None

    def __str__(self) -> str:
        return self.bcp47

    @property
    def bcp47(self) -> str:
        """Canonical BCP-47 rendering (e.g., 'zh-Hant-TW')."""
        return "-".join(
            part for part in (self.language, self.script, self.region, self.variant) if part
        )

    @property
    def base(self) -> LocaleTag:
        """Tag with region and variant removed; script is kept."""
        return replace(self, region=None, variant=None)


def parse_locale_code(code: str) -> LocaleTag:
    """Parse a locale code in any supported external convention.

    Accepted forms:
        en, en-US, en_US, zh-Hans, zh-Hans-CN, es-419, ca-valencia,
        sr@latn (vendor PO form), en-rUS and b+zh+Hant (Android qualifiers)

    Syntax parsing is delegated to babel.core.parse_locale; no CLDR data is
    required, so codes Babel has no locale data for still parse.

    Args:
        code: Locale code

    Returns:
        Parsed LocaleTag

    Raises:
        LocaleParseError: If code is empty or not a well-formed locale code

    Example:
        >>> parse_locale_code("sr@latn")
        LocaleTag(language='sr', script='Latn', region=None, variant=None)
        >>> parse_locale_code("pt_BR").bcp47
        'pt-BR'
    """
    raw = code.strip()
    if not raw:
        msg = "Locale code cannot be empty"
        raise LocaleParseError(msg, locale_code=code)

    if raw.startswith("b+"):
        raw = raw[2:].replace("+", "-")
    raw, _, modifier = raw.partition("@")
    parts = raw.replace("_", "-").split("-")
    parts[1:] = [
        match[1] if (match := _ANDROID_REGION.fullmatch(part)) else part for part in parts[1:]
    ]

    try:
        language, region, script, variant = parse_locale("-".join(parts), sep="-")[:4]
    except ValueError as e:
        msg = f"'{code}' is not a valid locale code: {e}"
        raise LocaleParseError(msg, locale_code=code) from e

    if not 2 <= len(language) <= 3 or not language.isascii():
        msg = f"'{code}' is not a valid locale code: bad language subtag '{language}'"
        raise LocaleParseError(msg, locale_code=code)

    if modifier:
        # Only the first modifier is meaningful: zh@hans@test -> hans
        modifier = modifier.split("@")[0].lower()
        if modifier in _SCRIPT_MODIFIERS:
            script = script or _SCRIPT_MODIFIERS[modifier]
        elif len(modifier) == 4 and modifier.isalpha():
            script = script or modifier.title()
        elif modifier.isalnum():
            variant = variant or modifier
        else:
            msg = f"'{code}' is not a valid locale code: bad modifier '{modifier}'"
            raise LocaleParseError(msg, locale_code=code)

    return LocaleTag(
        language=language,
        script=script,
        region=region,
        variant=variant.lower() if variant else None,
    )


def canonical_locale(code: str) -> str:
    """Return the canonical BCP-47 form of a locale code.

    Raises:
        LocaleParseError: If code cannot be parsed

    Example:
        >>> canonical_locale("sr@latn")
        'sr-Latn'
        >>> canonical_locale("PT_br")
        'pt-BR'
    """
    return parse_locale_code(code).bcp47


def render_locale(tag: LocaleTag, platform: Platform) -> str:
    """Render a parsed tag in the naming convention of a platform.

    Override tables are not consulted; see normalize_locale().
    """
    match platform:
        case Platform.ANDROID:
            return _android_qualifier(tag)
        case Platform.GETTEXT:
            name = f"{tag.language}_{tag.region}" if tag.region else tag.language
            modifier = tag.script.lower() if tag.script else tag.variant
            return f"{name}@{modifier}" if modifier else name
        case Platform.HUGO:
            return tag.bcp47.lower()
        case _:
            return tag.bcp47


def _android_qualifier(tag: LocaleTag) -> str:
    """Render an Android resource locale qualifier.

    Plain language and language-region tags use the legacy qualifier form;
    anything with a script, variant or numeric region needs the BCP-47 form.
    """
    language = ANDROID_LEGACY_LANGUAGES.get(tag.language, tag.language)
    if tag.script is None and tag.variant is None:
        if tag.region is None:
            return language
        if tag.region.isalpha():
            return f"{language}-r{tag.region}"
    subtags = (language, tag.script, tag.region, tag.variant)
    return "b+" + "+".join(part for part in subtags if part)


def normalize_locale(locale_code: str, platform: Platform) -> str:
    """Map a vendor locale code to the locale name a platform expects.

    The platform override table is checked first and its value returned
    verbatim. Otherwise the code is parsed and rendered for the platform.

    Args:
        locale_code: Vendor locale code (e.g., "pt-BR", "sr@latn")
        platform: Target platform

    Returns:
        Platform locale name (directory or file name token)

    Raises:
        LocaleParseError: If the code has no override and cannot be parsed

    Example:
        >>> normalize_locale("pt-BR", Platform.ANDROID)
        'pt-rBR'
        >>> normalize_locale("pt-BR", Platform.IOS)
        'pt'
        >>> normalize_locale("sr-Latn", Platform.GETTEXT)
        'sr@latn'
    """
    override = LOCALE_OVERRIDES[platform].get(locale_code)
    if override is not None:
        return override
    return render_locale(parse_locale_code(locale_code), platform)


def collapse_locales(locale_codes: Iterable[str], platform: Platform) -> dict[str, str]:
    """Map a batch of vendor codes to platform names, collapsing unambiguous regions.

    A code whose language is not shared with any other code in the batch is
    rendered without its region (en-US -> en). When two or more codes share a
    language, each keeps its full name (en-US, en-GB). The result depends on
    the whole batch, so call this once per export.

    Override tables still win. Codes that cannot be parsed are logged and left
    out of the result.

    Args:
        locale_codes: Vendor locale codes in one export
        platform: Target platform

    Returns:
        Dict of vendor code -> platform name, in input order

    Example:
        >>> collapse_locales(["en-US", "pt-BR", "pt-PT"], Platform.I18NEXT)
        {'en-US': 'en', 'pt-BR': 'pt-BR', 'pt-PT': 'pt-PT'}
    """
    overrides = LOCALE_OVERRIDES[platform]
    codes = list(dict.fromkeys(locale_codes))
    tags: dict[str, LocaleTag] = {}
    for code in codes:
        try:
            tags[code] = parse_locale_code(code)
        except LocaleParseError as e:
            if code not in overrides:
                logger.error("Skipping locale for %s: %s", platform, e)

    languages = Counter(tag.language for tag in tags.values())

    result: dict[str, str] = {}
    for code in codes:
        if code in overrides:
            result[code] = overrides[code]
        elif (tag := tags.get(code)) is not None:
            unambiguous = languages[tag.language] == 1
            result[code] = render_locale(tag.base if unambiguous else tag, platform)
    return result


def output_names(name: str) -> tuple[str, ...]:
    """Return every name an asset should be written under.

    Downstream consumers look locales up either by the platform name or by
    its canonical BCP-47 form. When the two differ, both are returned.

    Example:
        >>> output_names("pt_BR")
        ('pt_BR', 'pt-BR')
        >>> output_names("en")
        ('en',)
    """
    try:
        canonical = canonical_locale(name)
    except LocaleParseError:
        return (name,)
    if canonical == name:
        return (name,)
    logger.info("Mismatch for code %s: also writing %s", name, canonical)
    return (name, canonical)


def locale_from_path(path: str) -> str:
    """Extract the locale from a gettext directory path.

    The locale is the second-to-last path component. A script given as an
    @modifier is rendered as a BCP-47 script subtag.

    Example:
        >>> locale_from_path("/translations/sr@latn/LC_MESSAGES")
        'sr-Latn'
        >>> locale_from_path("/translations/pt_BR/LC_MESSAGES")
        'pt_BR'
        >>> locale_from_path("/translations")
        ''
    """
    parts = path.split("/")
    if len(parts) < 2:
        return ""
    locale_part = parts[-2]
    language, *modifiers = locale_part.split("@")
    if modifiers:
        script = modifiers[0]
        return f"{language}-{script[:1].upper()}{script[1:]}"
    return locale_part


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Used for CLDR display names; parsing for file naming never depends on
    Babel having locale data for a code.

    Args:
        locale_code: Locale code (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(locale_code.replace("-", "_"))
