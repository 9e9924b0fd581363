"""get-translations command line.

Commands:
    po <dir>                     gettext catalogs into <dir>/<locale>/LC_MESSAGES
    assets <file> [--template]   asset id constants source file
    json <dir> [tag]             i18next JSON files
    hugoyaml <dir> [tag]         Hugo (go-i18n) YAML files
    fallback                     print fallback chains of the project locales
    android <dir> [tag]          strings.xml into res/values-* directories
    ios <dir>                    .strings/.stringsdict/InfoPlist.strings into *.lproj
    ioscat <dir>                 Localizable.xcstrings and InfoPlist.xcstrings
    i18conv <asset> [formatKey]  convert an asset's placeholders to i18next

The API key is read from LOCO_RO_API_KEY. Directories must exist; they are
checked before any request is made.

Exit Codes:
    0   Success
    1   Configuration, request, payload or write failure
    2   Usage error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from locoexport.assets import generate_assets
from locoexport.client import LocoClient
from locoexport.config import Settings, require_directory
from locoexport.constants import TAG_MOBILE
from locoexport.converter import convert_asset_format
from locoexport.errors import LocoError
from locoexport.exporters import (
    export_android,
    export_hugo,
    export_i18next,
    export_ios,
    export_ios_catalog,
    export_po,
)
from locoexport.fallback import fetch_fallback_chains, format_chains

__all__ = ["build_parser", "main"]

logger = logging.getLogger(__name__)

type Handler = Callable[[LocoClient, argparse.Namespace], object]


def _po(client: LocoClient, args: argparse.Namespace) -> int:
    return export_po(client, args.directory)


def _assets(client: LocoClient, args: argparse.Namespace) -> int:
    return generate_assets(client, args.file, args.template)


def _json(client: LocoClient, args: argparse.Namespace) -> int:
    return export_i18next(client, args.directory, args.tag)


def _hugo(client: LocoClient, args: argparse.Namespace) -> int:
    return export_hugo(client, args.directory, args.tag)


def _fallback(client: LocoClient, _args: argparse.Namespace) -> None:
    for line in format_chains(fetch_fallback_chains(client)):
        print(line)


def _android(client: LocoClient, args: argparse.Namespace) -> int:
    return export_android(client, args.directory, args.tag)


def _ios(client: LocoClient, args: argparse.Namespace) -> object:
    return export_ios(client, args.directory)


def _ioscat(client: LocoClient, args: argparse.Namespace) -> object:
    return export_ios_catalog(client, args.directory)


def _i18conv(client: LocoClient, args: argparse.Namespace) -> int:
    return convert_asset_format(client, args.asset, args.format_key)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one subcommand per export."""
    parser = argparse.ArgumentParser(
        prog="get-translations",
        description="Download translations from Loco and write them in platform layouts.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    verbosity.add_argument(
        "--quiet", "-q", action="store_true", help="Log warnings and errors only"
    )

    commands = parser.add_subparsers(dest="command", required=True, metavar="command")

    def command(name: str, handler: Handler, help_text: str) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, help=help_text)
        sub.set_defaults(handler=handler)
        return sub

    def directory(sub: argparse.ArgumentParser, help_text: str) -> None:
        sub.add_argument("directory", help=help_text)

    def tag(sub: argparse.ArgumentParser, default: str = "") -> None:
        sub.add_argument("tag", nargs="?", default=default, help="Vendor tag filter")

    sub = command("po", _po, "Write gettext catalogs")
    directory(sub, "Translations directory")

    sub = command("assets", _assets, "Generate asset id constants")
    sub.add_argument("file", type=Path, help="Output source file")
    sub.add_argument("--template", type=Path, help="string.Template file to render")

    sub = command("json", _json, "Write i18next JSON files")
    directory(sub, "Output directory")
    tag(sub)

    sub = command("hugoyaml", _hugo, "Write Hugo YAML files")
    directory(sub, "Output directory")
    tag(sub)

    command("fallback", _fallback, "Print fallback chains of the project locales")

    sub = command("android", _android, "Write Android strings.xml files")
    directory(sub, "Android res directory")
    tag(sub, TAG_MOBILE)

    sub = command("ios", _ios, "Write iOS .strings files")
    directory(sub, "Directory holding the .lproj directories")

    sub = command("ioscat", _ioscat, "Write iOS string catalogs")
    directory(sub, "Directory holding the .lproj directories")

    sub = command("i18conv", _i18conv, "Convert an asset's placeholders to i18next")
    sub.add_argument("asset", help="Vendor asset id")
    sub.add_argument(
        "format_key",
        nargs="?",
        default="",
        metavar="formatKey",
        help="Placeholder name (parsed from the asset id by default)",
    )

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Run get-translations.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        settings = Settings.from_env()
        if getattr(args, "directory", None) is not None:
            args.directory = require_directory(args.directory)
        with LocoClient(settings) as client:
            args.handler(client, args)
    except LocoError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    except OSError as e:
        logger.error("%s failed: %s", args.command, e)
        return 1
    return 0
