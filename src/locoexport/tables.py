"""Static lookup tables.

Immutable configuration data loaded once at import. Every table is wrapped in
MappingProxyType so no code path can mutate it at run time.

Tables:
    ANDROID_LOCALE_OVERRIDES - vendor code -> Android resource qualifier
    IOS_LOCALE_OVERRIDES     - vendor code -> iOS .lproj name
    GETTEXT_LOCALE_OVERRIDES - vendor code -> gettext directory name
    I18NEXT_LOCALE_OVERRIDES - vendor code -> i18next file name
    HUGO_LOCALE_OVERRIDES    - vendor code -> Hugo file name
    LOCALE_OVERRIDES         - Platform -> one of the tables above
    ANDROID_LEGACY_LANGUAGES - ISO 639 code -> legacy Java code Android expects
    PLIST_ASSET_KEYS         - asset id -> plist keys it is written under
    IOS_LEGACY_FILTERS       - vendor tag -> archive format for the ios command
    IOS_CATALOG_FILTERS      - vendor filters fetched by the ioscat command

Override values are returned verbatim by the normalizer, bypassing parsing.

Python 3.13+. Zero external dependencies.
"""

from types import MappingProxyType

from locoexport.constants import BUNDLE_NAME_KEY, FORMAT_YML, TAG_IOS_PLIST
from locoexport.enums import Platform

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale directory maps
    "ANDROID_LOCALE_OVERRIDES",
    "IOS_LOCALE_OVERRIDES",
    "GETTEXT_LOCALE_OVERRIDES",
    "I18NEXT_LOCALE_OVERRIDES",
    "HUGO_LOCALE_OVERRIDES",
    "LOCALE_OVERRIDES",
    "ANDROID_LEGACY_LANGUAGES",
    # iOS
    "PLIST_ASSET_KEYS",
    "IOS_LEGACY_FILTERS",
    "IOS_CATALOG_FILTERS",
]

# ============================================================================
# LOCALE DIRECTORY MAPS
# ============================================================================

ANDROID_LOCALE_OVERRIDES = MappingProxyType({
    "pl-PL": "pl",
    "sv-SE": "sv",
    "da-DK": "da",
    "lt-LT": "lt",
    "ko-KR": "ko",
    "cs-CZ": "cs",
    "hr-HR": "hr",
    "bg-BG": "bg",
    "ja-JP": "ja",
    "ro-RO": "ro",
    "zh-CN": "zh",
    "uk-UA": "uk",
    "hu-HU": "hu",
    "el-GR": "el",
    "vi-VN": "vi",
    "th-TH": "th",
    "fi-FI": "fi",
    "gu-IN": "gu",
    "id-ID": "in",
    "tr-TR": "tr",
    "zh-Hant": "b+zh+Hant",
})

IOS_LOCALE_OVERRIDES = MappingProxyType({
    "pt-BR": "pt",
    "tw": "ak",
    "zh-CN": "zh-Hans",
    "tl": "fil",
    "vec-BR": "vec",
})

GETTEXT_LOCALE_OVERRIDES: MappingProxyType[str, str] = MappingProxyType({})

I18NEXT_LOCALE_OVERRIDES: MappingProxyType[str, str] = MappingProxyType({})

HUGO_LOCALE_OVERRIDES: MappingProxyType[str, str] = MappingProxyType({})

LOCALE_OVERRIDES = MappingProxyType({
    Platform.ANDROID: ANDROID_LOCALE_OVERRIDES,
    Platform.IOS: IOS_LOCALE_OVERRIDES,
    Platform.GETTEXT: GETTEXT_LOCALE_OVERRIDES,
    Platform.I18NEXT: I18NEXT_LOCALE_OVERRIDES,
    Platform.HUGO: HUGO_LOCALE_OVERRIDES,
})

# Android resolves these through java.util.Locale, which still uses the
# withdrawn ISO 639 codes.
ANDROID_LEGACY_LANGUAGES = MappingProxyType({
    "he": "iw",
    "id": "in",
    "yi": "ji",
})

# ============================================================================
# iOS
# ============================================================================

# One asset can feed several keys, e.g. both calendar permission prompts.
PLIST_ASSET_KEYS = MappingProxyType({
    "touchid.authentication-prompt": ("NSFaceIDUsageDescription",),
    "schedules.territory.current-location-usage": ("NSLocationWhenInUseUsageDescription",),
    "mobile.calendar.usage": (
        "NSCalendarsFullAccessUsageDescription",
        "NSCalendarsUsageDescription",
    ),
    "mobile.camera.usage": ("NSCameraUsageDescription",),
    "shortcut.last-month": ("shortcut.last-month",),
    "Hourglass": (BUNDLE_NAME_KEY,),
})

IOS_LEGACY_FILTERS = MappingProxyType({
    "iOS-strings": "strings",
    "iOS-plurals": "stringsdict",
    "iOS-plist": FORMAT_YML,
})

IOS_CATALOG_FILTERS: tuple[str, ...] = ("ios-strings,ios-plurals", TAG_IOS_PLIST)
