"""locoexport - Loco translation export tool.

Downloads translations from the Loco (localise.biz) API and writes them in
the layouts expected by gettext, Android, iOS, i18next and Hugo consumers.
Also generates asset identifier constants, prints locale fallback chains,
and converts Python-style placeholders of an asset to i18next syntax.

Public API:
    LocoClient - Authenticated API client
    Settings - Configuration read from the environment
    normalize_locale - Vendor locale code -> platform locale name
    collapse_locales - Batch normalization with region collapsing
    fallback_chains - Fallback chains between project locales

Exceptions:
    LocoError - Base exception class
    ConfigurationError - Missing API key or invalid directory
    UpstreamError - Failed API request
    ExportError - Concurrent export with failed tasks

Submodules:
    locoexport.exporters - Export commands per output format
    locoexport.assets - Asset identifier generation
    locoexport.converter - Placeholder format conversion
    locoexport.cli - get-translations command line
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .client import LocoClient
from .config import Settings
from .enums import Platform
from .errors import ConfigurationError, ExportError, LocoError, UpstreamError
from .fallback import fallback_chains
from .locale_utils import collapse_locales, normalize_locale

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("locoexport")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "ExportError",
    "LocoClient",
    "LocoError",
    "Platform",
    "Settings",
    "UpstreamError",
    "__version__",
    "collapse_locales",
    "fallback_chains",
    "normalize_locale",
]
