"""Shared constants for locoexport.

This module provides centralized configuration constants used across the
client, exporters and CLI. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Vendor API: base URL, endpoint paths, query parameter names
- Tags: vendor tag filters used by the export commands
- Output files: file names written into platform directories
- Limits: timeouts and size bounds

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Vendor API
    "DEFAULT_API_URL",
    "AUTH_HEADER",
    "AUTH_SCHEME",
    "API_KEY_ENV_VAR",
    "PATH_PO_ARCHIVE",
    "PATH_ANDROID_ARCHIVE",
    "PATH_ARCHIVE_TEMPLATE",
    "PATH_ALL_JSON",
    "PATH_ALL_XCSTRINGS",
    "PATH_LOCALES",
    "PATH_ASSETS",
    "PATH_TRANSLATIONS_JSON",
    "PATH_TRANSLATION",
    "PATH_ASSET_JSON",
    "PARAM_FILTER",
    "PARAM_FALLBACK",
    "PARAM_INDEX",
    "PARAM_FORMAT",
    "PARAM_PRINTF",
    "FORMAT_ANDROID",
    "FORMAT_I18NEXT",
    "FORMAT_YAML_SIMPLE",
    "FORMAT_YML",
    "PRINTF_I18NEXT",
    # Defaults
    "DEFAULT_PROJECT",
    "DEFAULT_FALLBACK_LOCALE",
    # Tags
    "TAG_BACKEND",
    "TAG_MOBILE",
    "TAG_IOS_PLIST",
    # Output files
    "PO_DIR",
    "PO_FILENAME",
    "ANDROID_STRINGS_FILENAME",
    "ANDROID_VALUES_PREFIX",
    "LPROJ_SUFFIX",
    "PLIST_STRINGS_FILENAME",
    "STRINGS_CATALOG_FILENAME",
    "PLIST_CATALOG_FILENAME",
    "EXTRACTION_STATE_MANUAL",
    "BUNDLE_NAME_KEY",
    # Limits
    "DEFAULT_TIMEOUT",
    "WRITE_TIMEOUT",
    "MAX_ARCHIVE_MEMBER_SIZE",
    "MAX_BUNDLE_NAME_LENGTH",
]

# ============================================================================
# VENDOR API
# ============================================================================

DEFAULT_API_URL: str = "https://localise.biz/api"

# #nosec B105 - environment variable name, not a credential
API_KEY_ENV_VAR: str = "LOCO_RO_API_KEY"

AUTH_HEADER: str = "Authorization"
AUTH_SCHEME: str = "Loco"

PATH_PO_ARCHIVE: str = "/export/archive/po.zip"
PATH_ANDROID_ARCHIVE: str = "/export/archive/xml.zip"
# Format is one of strings, stringsdict, yml
PATH_ARCHIVE_TEMPLATE: str = "/export/archive/{format}.zip"
PATH_ALL_JSON: str = "/export/all.json"
PATH_ALL_XCSTRINGS: str = "/export/all.xcstrings"
PATH_LOCALES: str = "/locales"
PATH_ASSETS: str = "/assets"
PATH_TRANSLATIONS_JSON: str = "/translations/{asset}.json"
PATH_TRANSLATION: str = "/translations/{asset}/{locale}"
PATH_ASSET_JSON: str = "/assets/{asset}.json"

PARAM_FILTER: str = "filter"
PARAM_FALLBACK: str = "fallback"
PARAM_INDEX: str = "index"
PARAM_FORMAT: str = "format"
PARAM_PRINTF: str = "printf"

FORMAT_ANDROID: str = "android"
FORMAT_I18NEXT: str = "i18next4"
FORMAT_YAML_SIMPLE: str = "simple"
FORMAT_YML: str = "yml"
PRINTF_I18NEXT: str = "i18next"

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_PROJECT: str = "hourglass"
DEFAULT_FALLBACK_LOCALE: str = "en-US"

# ============================================================================
# TAGS
# ============================================================================

TAG_BACKEND: str = "backend"
TAG_MOBILE: str = "mobile-apps"
TAG_IOS_PLIST: str = "ios-plist"

# ============================================================================
# OUTPUT FILES
# ============================================================================

PO_DIR: str = "LC_MESSAGES"
PO_FILENAME: str = "messages.po"

ANDROID_STRINGS_FILENAME: str = "strings.xml"
ANDROID_VALUES_PREFIX: str = "values"

LPROJ_SUFFIX: str = ".lproj"
PLIST_STRINGS_FILENAME: str = "InfoPlist.strings"
STRINGS_CATALOG_FILENAME: str = "Localizable.xcstrings"
PLIST_CATALOG_FILENAME: str = "InfoPlist.xcstrings"
EXTRACTION_STATE_MANUAL: str = "manual"
BUNDLE_NAME_KEY: str = "CFBundleName"

# ============================================================================
# LIMITS
# ============================================================================

# Seconds. Export requests can be slow on large projects; writes are single values.
DEFAULT_TIMEOUT: float = 20.0
WRITE_TIMEOUT: float = 30.0

# Bytes read from a single archive member (10 MB).
MAX_ARCHIVE_MEMBER_SIZE: int = 10 * 1000 * 1000

# iOS home screen truncates bundle display names beyond this length.
MAX_BUNDLE_NAME_LENGTH: int = 15
