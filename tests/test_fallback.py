"""Tests for fallback chain computation.

Python 3.13+.
"""

import logging

import pytest
from hypothesis import event, given

from locoexport.constants import PATH_LOCALES
from locoexport.errors import LocoError, PayloadError
from locoexport.fallback import (
    fallback_chain,
    fallback_chains,
    fetch_fallback_chains,
    format_chains,
    locale_distance,
    match_locale,
    same_likely_region,
)
from locoexport.locale_utils import parse_locale_code
from locoexport.models import VendorLocale
from tests.helpers.fakes import FakeClient
from tests.strategies import project_locales

PROJECT = [
    VendorLocale(code="en-US", name="English (US)", source=True),
    VendorLocale(code="en-GB", name="English (UK)"),
    VendorLocale(code="pt-BR", name="Portuguese (Brazil)"),
    VendorLocale(code="pt-PT", name="Portuguese (Portugal)"),
    VendorLocale(code="fr-FR", name="French"),
    VendorLocale(code="es-ES", name="Spanish"),
    VendorLocale(code="es-MX", name="Spanish (Mexico)"),
]


def tags(*codes: str):
    return [parse_locale_code(code) for code in codes]


class TestLocaleDistance:
    """Test locale_distance weights."""

    def test_region_difference(self) -> None:
        """Same language and script, different region."""
        assert locale_distance(parse_locale_code("en-GB"), parse_locale_code("en-US")) == 4

    def test_different_language(self) -> None:
        """Different languages never match."""
        assert locale_distance(parse_locale_code("en"), parse_locale_code("fr")) is None

    def test_script_outweighs_region(self) -> None:
        """A script mismatch is worse than a region mismatch."""
        target = parse_locale_code("zh-Hant-TW")
        same_script = locale_distance(target, parse_locale_code("zh-Hant-HK"))
        other_script = locale_distance(target, parse_locale_code("zh-Hans-TW"))
        assert same_script is not None
        assert other_script is not None
        assert same_script < other_script


class TestSameLikelyRegion:
    """Test same_likely_region."""

    @pytest.mark.parametrize(
        ("first", "second"),
        [("en", "en-US"), ("pt", "pt-BR"), ("zh-Hans-CN", "zh-CN"), ("zh-TW", "zh-Hant")],
    )
    def test_equivalent(self, first: str, second: str) -> None:
        """A missing region is the likely one; script is ignored."""
        assert same_likely_region(parse_locale_code(first), parse_locale_code(second))

    @pytest.mark.parametrize(
        ("first", "second"), [("pt", "pt-PT"), ("en-US", "en-GB"), ("en", "fr-US")]
    )
    def test_different(self, first: str, second: str) -> None:
        """Another region or language is a different locale."""
        assert not same_likely_region(parse_locale_code(first), parse_locale_code(second))


class TestMatchLocale:
    """Test match_locale selection."""

    def test_prefers_same_script(self) -> None:
        """zh-Hant-TW matches zh-Hant-HK over zh-Hans-CN."""
        supported = tags("en-US", "zh-Hans-CN", "zh-Hant-HK")
        assert match_locale(parse_locale_code("zh-Hant-TW"), supported) == supported[2]

    def test_tie_goes_to_first(self) -> None:
        """Equal distances resolve to the earlier candidate."""
        supported = tags("fr", "en-GB", "en-CA")
        assert match_locale(parse_locale_code("en-AU"), supported) == supported[1]

    def test_default_is_first_candidate(self) -> None:
        """Without a same-language candidate the first one is returned."""
        supported = tags("en-US", "fr")
        assert match_locale(parse_locale_code("de"), supported) == supported[0]

    def test_empty_candidates(self) -> None:
        """No candidates, no match."""
        assert match_locale(parse_locale_code("de"), []) is None


class TestFallbackChain:
    """Test fallback_chain for single targets."""

    def test_region_sibling_then_source(self) -> None:
        """pt-PT falls back to pt-BR, then to the source."""
        supported = tags("en-US", "en-GB", "pt-BR", "pt-PT", "fr-FR")
        chain = fallback_chain(supported, parse_locale_code("pt-PT"), supported[0])
        assert [tag.bcp47 for tag in chain] == ["pt-BR", "en-US"]

    def test_source_language_stops_at_source(self) -> None:
        """en-GB falls back directly to the source en-US."""
        supported = tags("en-US", "en-GB")
        chain = fallback_chain(supported, parse_locale_code("en-GB"), supported[0])
        assert [tag.bcp47 for tag in chain] == ["en-US"]

    def test_script_variants_removed_together(self) -> None:
        """Candidates sharing language and region with a match are dropped with it."""
        supported = tags("en", "zh-Hans-CN", "zh-CN", "zh-Hant-TW")
        chain = fallback_chain(supported, parse_locale_code("zh-Hant-TW"), supported[0])
        assert "zh-CN" not in [tag.bcp47 for tag in chain[1:]]
        assert chain[-1].bcp47 == "en"


class TestFallbackChains:
    """Test fallback_chains for a whole project."""

    def test_project_chains(self) -> None:
        """Every non-source locale gets a chain ending at the source."""
        chains = fallback_chains(PROJECT)
        assert chains == {
            "en-GB": ("en-US",),
            "pt-BR": ("pt-PT", "en-US"),
            "pt-PT": ("pt-BR", "en-US"),
            "fr-FR": ("en-US",),
            "es-ES": ("es-MX", "en-US"),
            "es-MX": ("es-ES", "en-US"),
        }

    def test_bare_and_regional_locales(self) -> None:
        """A bare language stands for its likely region in chains and source checks."""
        locales = [
            VendorLocale(code="en-US", source=True),
            VendorLocale(code="en"),
            VendorLocale(code="pt"),
            VendorLocale(code="pt-BR"),
            VendorLocale(code="pt-PT"),
        ]
        assert fallback_chains(locales) == {
            "pt": ("pt-PT", "en-US"),
            "pt-BR": ("pt-PT", "en-US"),
            "pt-PT": ("pt", "en-US"),
        }

    def test_source_not_first_in_vendor_order(self) -> None:
        """The source locale is moved first regardless of vendor order."""
        locales = [VendorLocale(code="de-DE"), VendorLocale(code="en-US", source=True)]
        assert fallback_chains(locales) == {"de-DE": ("en-US",)}

    def test_missing_source(self) -> None:
        """A project without a source locale is an error."""
        with pytest.raises(LocoError, match="no source locale"):
            fallback_chains([VendorLocale(code="en-US")])

    def test_unparseable_source(self) -> None:
        """A source locale that cannot be parsed is an error."""
        with pytest.raises(LocoError, match="source locale cannot be parsed"):
            fallback_chains([VendorLocale(code="???", source=True)])

    def test_unparseable_locale_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Other unparseable locales are logged and skipped."""
        locales = [VendorLocale(code="en-US", source=True), VendorLocale(code="???")]
        with caplog.at_level(logging.ERROR, logger="locoexport.fallback"):
            assert fallback_chains(locales) == {}
        assert "Skipping locale in fallback list" in caplog.text


class TestFetchAndFormat:
    """Test fetching the locale list and printing chains."""

    def test_fetch_fallback_chains(self) -> None:
        """The vendor locale list is decoded and chained."""
        client = FakeClient(
            {
                PATH_LOCALES: [
                    {"code": "en-US", "name": "English", "source": True},
                    {"code": "fr-FR", "name": "French", "source": False},
                ]
            }
        )
        assert fetch_fallback_chains(client) == {"fr-FR": ("en-US",)}

    def test_fetch_rejects_non_list(self) -> None:
        """A payload that is not a list is a PayloadError."""
        client = FakeClient({PATH_LOCALES: {"code": "en-US"}})
        with pytest.raises(PayloadError):
            fetch_fallback_chains(client)

    def test_format_chains(self) -> None:
        """Lines read 'locale: member, member'."""
        lines = format_chains({"pt-PT": ("pt-BR", "en-US"), "fr": ("en-US",)})
        assert lines == ["pt-PT: pt-BR, en-US", "fr: en-US"]


# Hypothesis property-based tests


@given(locales=project_locales())
def test_property_chains_exclude_target_and_end_at_source(locales: list[VendorLocale]) -> None:
    """Property: chains never contain the target, never repeat, and end at the source."""
    source = parse_locale_code(next(loc.code for loc in locales if loc.source))
    chains = fallback_chains(locales)
    event(f"chains={len(chains)}")
    for target, chain in chains.items():
        assert target not in chain
        assert len(set(chain)) == len(chain)
        assert chain
        assert same_likely_region(parse_locale_code(chain[-1]), source)
        tag = parse_locale_code(target)
        assert not any(same_likely_region(parse_locale_code(m), tag) for m in chain)
