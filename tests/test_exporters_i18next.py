"""Tests for the i18next JSON export.

Python 3.13+.
"""

import json
import logging
from pathlib import Path

import pytest

from locoexport.constants import PATH_ALL_JSON
from locoexport.errors import LocoError, PayloadError
from locoexport.exporters.i18next import export_i18next, write_i18next
from tests.helpers.fakes import FakeClient

PAYLOAD = {
    "en-US": {"hourglass": {"greeting": "Hello {{name}}"}},
    "pt-BR": {"hourglass": {"greeting": "Olá {{name}}"}},
    "pt-PT": {"hourglass": {"greeting": "Olá, {{name}}"}},
    "ca-valencia": {"hourglass": {"greeting": "Hola {{name}}"}},
}


def read(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


class TestExportI18next:
    """Test export_i18next request parameters."""

    def test_request_parameters(self, tmp_path: Path) -> None:
        """i18next format and printf conversion are requested; tag is optional."""
        client = FakeClient({PATH_ALL_JSON: PAYLOAD})
        export_i18next(client, tmp_path)
        export_i18next(client, tmp_path, "web")
        assert client.params_for(PATH_ALL_JSON) == [
            {"format": "i18next4", "fallback": "en-US", "printf": "i18next"},
            {"format": "i18next4", "fallback": "en-US", "printf": "i18next", "filter": "web"},
        ]


class TestWriteI18next:
    """Test write_i18next file layout."""

    def test_one_file_per_locale(self, tmp_path: Path) -> None:
        """Unambiguous languages lose their region; shared ones keep it."""
        written = write_i18next(tmp_path, PAYLOAD, project="hourglass")

        assert written == 4
        assert read(tmp_path / "en.json") == {"greeting": "Hello {{name}}"}
        assert read(tmp_path / "pt-BR.json") == {"greeting": "Olá {{name}}"}
        assert read(tmp_path / "pt-PT.json") == {"greeting": "Olá, {{name}}"}
        assert read(tmp_path / "ca.json") == {"greeting": "Hola {{name}}"}
        assert not (tmp_path / "en-US.json").exists()

    def test_unexpected_project_is_fatal(self, tmp_path: Path) -> None:
        """Another project in the payload stops the export before any write."""
        payload = {
            "en-US": {"hourglass": {"a": "b"}},
            "fr-FR": {"other": {"a": "b"}},
        }
        with pytest.raises(LocoError, match="unexpected project in i18next response from loco: other"):
            write_i18next(tmp_path, payload, project="hourglass")
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.parametrize("payload", [[], {"en-US": ["hourglass"]}])
    def test_malformed_payload(self, tmp_path: Path, payload: object) -> None:
        """Payloads that are not {locale: {project: data}} are rejected."""
        with pytest.raises(PayloadError):
            write_i18next(tmp_path, payload, project="hourglass")

    def test_unparseable_locale_skipped(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A locale that cannot be parsed is logged and never written."""
        payload = {
            "en-US": {"hourglass": {"a": "b"}},
            "??bad": {"hourglass": {"a": "c"}},
        }
        with caplog.at_level(logging.ERROR, logger="locoexport.locale_utils"):
            assert write_i18next(tmp_path, payload, project="hourglass") == 1
        assert sorted(p.name for p in tmp_path.iterdir()) == ["en.json"]
        assert "Skipping locale" in caplog.text
