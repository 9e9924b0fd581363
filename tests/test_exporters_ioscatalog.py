"""Tests for the iOS string catalog export.

Python 3.13+.
"""

import copy
import json
import logging
from pathlib import Path

import pytest

from locoexport.constants import PATH_ALL_XCSTRINGS
from locoexport.errors import ExportError, PayloadError
from locoexport.exporters.ioscatalog import (
    check_bundle_name,
    export_ios_catalog,
    rewrite_catalog,
    write_catalog,
)
from tests.helpers.fakes import FakeClient


def unit(value: str) -> dict[str, dict[str, str]]:
    return {"stringUnit": {"state": "translated", "value": value}}


CATALOG = {
    "sourceLanguage": "en-US",
    "version": "1.0",
    "strings": {
        "greeting": {
            "extractionState": "stale",
            "localizations": {
                "en-US": unit("Hi"),
                "pt-BR": unit("Oi"),
                "pt-PT": unit("Olá"),
                "ko-KR": unit("안녕"),
            },
        },
        "farewell": {
            "localizations": {
                "en-US": unit("Bye"),
                "ko-KR": unit("안녕히"),
            },
        },
    },
}

PLIST_CATALOG = {
    "sourceLanguage": "en-US",
    "version": "1.0",
    "strings": {
        "Hourglass": {
            "localizations": {
                "en-US": unit("Hourglass"),
                "pt-BR": unit("Ampulheta de Tempo Longa"),
            },
        },
        "mobile.calendar.usage": {"localizations": {"en-US": unit("Calendar")}},
    },
}


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    for name in ("en.lproj", "pt.lproj", "pt-PT.lproj"):
        (tmp_path / name).mkdir()
    return tmp_path


class TestCheckBundleName:
    """Test check_bundle_name."""

    def test_flags_empty_and_long_values(self, caplog: pytest.LogCaptureFixture) -> None:
        """Empty names and names over 15 characters are flagged."""
        localizations = {
            "en": unit(""),
            "fr": unit("Sablier"),
            "pt": unit("Ampulheta de Tempo Longa"),
            "de": {"variations": {}},
        }
        with caplog.at_level(logging.WARNING, logger="locoexport.exporters.ioscatalog"):
            assert check_bundle_name(localizations) == ["en", "pt"]
        assert "CFBundleName for pt has length 24" in caplog.text

    def test_fifteen_characters_allowed(self) -> None:
        """Exactly 15 characters is fine."""
        assert check_bundle_name({"en": unit("x" * 15)}) == []


class TestRewriteCatalog:
    """Test rewrite_catalog."""

    def test_locales_renamed_and_filtered(
        self, app_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Locale keys use .lproj names; locales without a directory are dropped once."""
        with caplog.at_level(logging.INFO, logger="locoexport.exporters.ioscatalog"):
            result = rewrite_catalog(CATALOG, app_dir)

        assert result["sourceLanguage"] == "en"
        assert result["version"] == "1.0"
        greeting = result["strings"]["greeting"]
        assert greeting["extractionState"] == "manual"
        assert greeting["localizations"] == {
            "en": unit("Hi"),
            "pt": unit("Oi"),
            "pt-PT": unit("Olá"),
        }
        assert result["strings"]["farewell"]["localizations"] == {"en": unit("Bye")}
        assert result["strings"]["farewell"]["extractionState"] == "manual"
        assert caplog.text.count("Skipping locale ko") == 1

    def test_unparseable_locale_dropped(self, app_dir: Path) -> None:
        """Localizations under a key that is not a locale are not kept."""
        (app_dir / "Base.lproj").mkdir()
        catalog = {
            "sourceLanguage": "en-US",
            "strings": {"greeting": {"localizations": {"en-US": unit("Hi"), "Base": unit("Hi")}}},
        }
        result = rewrite_catalog(catalog, app_dir)
        assert result["strings"]["greeting"]["localizations"] == {"en": unit("Hi")}

    def test_input_not_modified(self, app_dir: Path) -> None:
        """The vendor payload is left as it was."""
        original = copy.deepcopy(CATALOG)
        rewrite_catalog(CATALOG, app_dir)
        assert original == CATALOG

    def test_plist_fan_out(self, app_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Plist assets are moved to the keys they feed."""
        with caplog.at_level(logging.WARNING, logger="locoexport.exporters.ioscatalog"):
            result = rewrite_catalog(PLIST_CATALOG, app_dir)

        strings = result["strings"]
        assert set(strings) == {
            "CFBundleName",
            "NSCalendarsFullAccessUsageDescription",
            "NSCalendarsUsageDescription",
        }
        assert strings["NSCalendarsUsageDescription"]["localizations"] == {"en": unit("Calendar")}
        assert "CFBundleName for pt has length 24" in caplog.text

    @pytest.mark.parametrize(
        "payload",
        [[], {"sourceLanguage": "en"}, {"strings": {"a": "text"}}, {"strings": {"a": {"localizations": []}}}],
    )
    def test_malformed_payload(self, app_dir: Path, payload: object) -> None:
        """Payloads that are not string catalogs are rejected."""
        with pytest.raises(PayloadError):
            rewrite_catalog(payload, app_dir)


class TestWriteCatalog:
    """Test write_catalog output."""

    def test_xcode_json_layout(self, app_dir: Path) -> None:
        """Output uses Xcode's ' : ' separator and sorted keys."""
        assert write_catalog(app_dir, CATALOG, plist=False) == 1
        text = (app_dir / "Localizable.xcstrings").read_text(encoding="utf-8")
        assert '"sourceLanguage" : "en"' in text
        assert text.index('"farewell"') < text.index('"greeting"')
        assert json.loads(text)["strings"]["greeting"]["localizations"]["pt-PT"] == unit("Olá")

    def test_plist_file_name(self, app_dir: Path) -> None:
        """The plist catalog is written to InfoPlist.xcstrings."""
        write_catalog(app_dir, PLIST_CATALOG, plist=True)
        assert (app_dir / "InfoPlist.xcstrings").exists()


class TestExportIosCatalog:
    """Test the concurrent catalog export."""

    def test_both_catalogs_written(self, app_dir: Path) -> None:
        """Each filter is fetched and written to its own file."""
        client = FakeClient(
            {
                (PATH_ALL_XCSTRINGS, "ios-strings,ios-plurals"): CATALOG,
                (PATH_ALL_XCSTRINGS, "ios-plist"): PLIST_CATALOG,
            }
        )
        summary = export_ios_catalog(client, app_dir)

        assert summary.all_successful
        assert (app_dir / "Localizable.xcstrings").exists()
        assert (app_dir / "InfoPlist.xcstrings").exists()
        assert sorted(params["filter"] for params in client.params_for(PATH_ALL_XCSTRINGS)) == [
            "ios-plist",
            "ios-strings,ios-plurals",
        ]

    def test_one_failure_fails_export(self, app_dir: Path) -> None:
        """A failed fetch raises after the other catalog was written."""
        client = FakeClient({(PATH_ALL_XCSTRINGS, "ios-strings,ios-plurals"): CATALOG})
        with pytest.raises(ExportError, match="did not process 2 sets"):
            export_ios_catalog(client, app_dir)
        assert (app_dir / "Localizable.xcstrings").exists()
        assert not (app_dir / "InfoPlist.xcstrings").exists()
