"""Vendor API data types.

Immutable records decoded from Loco JSON responses. Only the fields this tool
reads are kept; everything else in the payload is ignored.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from locoexport.errors import PayloadError

__all__ = [
    "AssetId",
    "LocaleCode",
    "VendorAsset",
    "VendorLocale",
    "VendorTranslation",
]

type LocaleCode = str
"""Locale code as the vendor or a platform spells it (e.g., 'pt-BR', 'sr@latn')."""

type AssetId = str
"""Vendor asset identifier (e.g., 'touchid.authentication-prompt')."""


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        msg = f"expected a JSON object for {what}, got {type(data).__name__}"
        raise PayloadError(msg)
    return data


@dataclass(frozen=True, slots=True)
class VendorLocale:
    """A locale enabled in the vendor project.

    Attributes:
        code: Vendor locale code
        name: Display name
        source: True for the project's source (original) locale
    """

    code: LocaleCode
    name: str = ""
    source: bool = False

    @classmethod
    def from_json(cls, data: Any) -> VendorLocale:
        """Build from one element of the /locales response.

        Raises:
            PayloadError: If the element is not an object with a string code
        """
        obj = _require_mapping(data, "locale")
        code = obj.get("code")
        if not isinstance(code, str):
            msg = f"locale without a code: {obj!r}"
            raise PayloadError(msg)
        return cls(code=code, name=str(obj.get("name") or ""), source=bool(obj.get("source")))


@dataclass(frozen=True, slots=True)
class VendorAsset:
    """An asset in the vendor catalog. Only the id is used."""

    id: AssetId

    @classmethod
    def from_json(cls, data: Any) -> VendorAsset:
        """Build from one element of the /assets response.

        Raises:
            PayloadError: If the element has no string id
        """
        obj = _require_mapping(data, "asset")
        asset_id = obj.get("id")
        if not isinstance(asset_id, str):
            msg = f"asset without an id: {obj!r}"
            raise PayloadError(msg)
        return cls(id=asset_id)


@dataclass(frozen=True, slots=True)
class VendorTranslation:
    """One locale's translation of an asset.

    Attributes:
        id: Asset id
        locale: Locale the translation belongs to
        translated: Vendor flag; False for untranslated placeholders
        translation: Translated text
        plurals: Plural form translations, if the asset has any
    """

    id: AssetId
    locale: VendorLocale
    translated: bool = False
    translation: str = ""
    plurals: tuple[VendorTranslation, ...] = ()

    @classmethod
    def from_json(cls, data: Any, locale: VendorLocale | None = None) -> VendorTranslation:
        """Build from one element of the /translations/{asset}.json response.

        Plural entries inherit the parent's locale.

        Raises:
            PayloadError: If the element is malformed
        """
        obj = _require_mapping(data, "translation")
        raw_locale = obj.get("locale")
        if raw_locale is not None:
            locale = VendorLocale.from_json(raw_locale)
        if locale is None:
            msg = f"translation without a locale: {obj!r}"
            raise PayloadError(msg)
        plurals = obj.get("plurals") or ()
        return cls(
            id=str(obj.get("id") or ""),
            locale=locale,
            translated=bool(obj.get("translated")),
            translation=str(obj.get("translation") or ""),
            plurals=tuple(cls.from_json(p, locale) for p in plurals),
        )
