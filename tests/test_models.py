"""Tests for vendor JSON records.

Python 3.13+.
"""

import pytest

from locoexport.errors import PayloadError
from locoexport.models import VendorAsset, VendorLocale, VendorTranslation


class TestVendorLocale:
    """Test VendorLocale.from_json."""

    def test_from_json(self) -> None:
        """Code, name and source flag are read; other fields ignored."""
        locale = VendorLocale.from_json(
            {"code": "pt-BR", "name": "Portuguese (Brazil)", "source": False, "plurals": {}}
        )
        assert locale == VendorLocale(code="pt-BR", name="Portuguese (Brazil)", source=False)

    @pytest.mark.parametrize("data", [[], "en", {"name": "English"}, {"code": 7}])
    def test_malformed(self, data: object) -> None:
        """Non-objects and missing codes are rejected."""
        with pytest.raises(PayloadError):
            VendorLocale.from_json(data)


class TestVendorAsset:
    """Test VendorAsset.from_json."""

    def test_from_json(self) -> None:
        """Only the id is kept."""
        assert VendorAsset.from_json({"id": "a.b", "type": "text"}) == VendorAsset(id="a.b")

    def test_missing_id(self) -> None:
        """An asset without an id is rejected."""
        with pytest.raises(PayloadError, match="asset without an id"):
            VendorAsset.from_json({"type": "text"})


class TestVendorTranslation:
    """Test VendorTranslation.from_json."""

    def test_plurals_inherit_locale(self) -> None:
        """Plural entries without a locale take the parent's."""
        translation = VendorTranslation.from_json(
            {
                "id": "items %(count)s",
                "translated": True,
                "translation": "%(count)s item",
                "locale": {"code": "en-US", "name": "English"},
                "plurals": [{"id": "items %(count)s", "translated": True, "translation": "%(count)s items"}],
            }
        )
        assert translation.locale.code == "en-US"
        assert translation.plurals[0].locale is translation.locale
        assert translation.plurals[0].translation == "%(count)s items"

    def test_untranslated_defaults(self) -> None:
        """Missing flags and text default to untranslated and empty."""
        translation = VendorTranslation.from_json({"id": "a", "locale": {"code": "fr"}})
        assert translation.translated is False
        assert translation.translation == ""

    def test_missing_locale(self) -> None:
        """A top-level translation needs a locale."""
        with pytest.raises(PayloadError, match="without a locale"):
            VendorTranslation.from_json({"id": "a"})
