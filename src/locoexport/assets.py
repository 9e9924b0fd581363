"""Asset identifier generation.

Turns vendor asset ids into source-code constant names and renders them
into a source file, so application code refers to assets by constant
instead of by string literal.

The default template produces a Go constant block:

    package locales

    const (
        TouchidAuthenticationPrompt = "touchid.authentication-prompt"
    )

A custom string.Template file can be supplied instead. It receives
$constants (one '<indent>Name = "asset.id"' line per asset) and $count.

Python 3.13+.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import TYPE_CHECKING

from locoexport.constants import PATH_ASSETS
from locoexport.errors import LocoError, PayloadError
from locoexport.models import AssetId, VendorAsset

if TYPE_CHECKING:
    from locoexport.client import LocoClient

__all__ = [
    "DEFAULT_TEMPLATE",
    "AssetConstant",
    "asset_constants",
    "fetch_assets",
    "generate_assets",
    "render_assets",
    "valid_constant",
]

logger = logging.getLogger(__name__)

_NAMED_PARAMETER = re.compile(r"%\((\w+?)\)(\S)?")

DEFAULT_TEMPLATE = Template(
    "// Code generated by get-translations assets. DO NOT EDIT.\n"
    "\n"
    "package locales\n"
    "\n"
    "const (\n"
    "$constants"
    ")\n"
)


@dataclass(frozen=True, slots=True)
class AssetConstant:
    """A vendor asset id and the constant name generated for it."""

    name: str
    asset_id: AssetId


def valid_constant(asset_id: str) -> str:
    """Create a valid identifier from a vendor asset id.

    Whitespace-separated fields are joined; dots split words, and each
    hyphen-separated word is capitalized. A '%(name)s' placeholder field
    becomes '_Name', other '%' fields are dropped. Identifiers cannot start
    with a digit, so such results get a leading underscore.

    Example:
        >>> valid_constant("touchid.authentication-prompt")
        'TouchidAuthenticationPrompt'
        >>> valid_constant("import.drop-here %(filename)s")
        'ImportDropHere_Filename'
        >>> valid_constant("404.title")
        '_404Title'
    """
    identifier = ""
    for field in asset_id.split():
        if field.startswith("%"):
            if match := _NAMED_PARAMETER.match(field):
                identifier += "_" + match[1].capitalize()
            continue
        for part in field.split("."):
            identifier += "".join(word.capitalize() for word in part.split("-"))

    if identifier[:1].isdigit():
        identifier = "_" + identifier
    return identifier


def asset_constants(asset_ids: list[AssetId]) -> list[AssetConstant]:
    """Generate constants for asset ids, sorted by asset id.

    Asset ids that produce an identifier already taken (or none at all) are
    logged and skipped; the first asset id in sorted order keeps the name.
    """
    constants: list[AssetConstant] = []
    taken: dict[str, AssetId] = {}
    for asset_id in sorted(set(asset_ids)):
        name = valid_constant(asset_id)
        if not name:
            logger.error("Asset %r does not produce an identifier, skipping", asset_id)
            continue
        if name in taken:
            logger.error(
                "Asset %r maps to %s, already used by %r, skipping", asset_id, name, taken[name]
            )
            continue
        taken[name] = asset_id
        constants.append(AssetConstant(name=name, asset_id=asset_id))
    return constants


def render_assets(constants: list[AssetConstant], template: Template = DEFAULT_TEMPLATE) -> str:
    """Render constants with a string.Template.

    Raises:
        LocoError: If the template uses an unknown placeholder
    """
    lines = "".join(
        f"\t{c.name} = {json.dumps(c.asset_id, ensure_ascii=False)}\n" for c in constants
    )
    try:
        return template.substitute(constants=lines, count=len(constants))
    except (KeyError, ValueError) as e:
        msg = f"invalid asset template: {e}"
        raise LocoError(msg) from e


def fetch_assets(client: LocoClient) -> list[AssetId]:
    """Fetch every asset id of the project.

    Raises:
        UpstreamError: If the request fails
        PayloadError: If the response is not a list of assets
    """
    payload = client.get_json(PATH_ASSETS)
    if not isinstance(payload, list):
        msg = f"expected a JSON list of assets, got {type(payload).__name__}"
        raise PayloadError(msg)
    return [VendorAsset.from_json(item).id for item in payload]


def generate_assets(client: LocoClient, output: Path, template: Path | None = None) -> int:
    """Fetch asset ids and write the generated constants file.

    Args:
        client: Loco client
        output: File to write (replaced if it exists)
        template: string.Template file to use instead of the Go default

    Returns:
        Number of constants written

    Raises:
        UpstreamError: If the request fails
        PayloadError: If the response is not a list of assets
        LocoError: If the template is invalid
        OSError: If the template cannot be read or the output written
    """
    tmpl = DEFAULT_TEMPLATE if template is None else Template(template.read_text(encoding="utf-8"))
    constants = asset_constants(fetch_assets(client))
    output.write_text(render_assets(constants, tmpl), encoding="utf-8")
    logger.info("Wrote %d asset constants to %s", len(constants), output)
    return len(constants)
