"""
Unit tests for the localized message catalog.
"""

import pytest

from vestra.api.messages import MESSAGES, negotiate_locale, translate


class TestCatalog:
    """Both locales cover the same keys."""

    def test_locales_have_same_keys(self) -> None:
        assert set(MESSAGES["en"]) == set(MESSAGES["pt-BR"])

    def test_translate(self) -> None:
        assert translate("account_disabled", "en") == "Account disabled"
        assert translate("account_disabled", "pt-BR") == "Conta desativada"

    def test_unknown_locale_falls_back_to_english(self) -> None:
        assert translate("account_disabled", "fr") == "Account disabled"


class TestNegotiateLocale:
    """Tests for Accept-Language negotiation."""

    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            (None, "en"),
            ("", "en"),
            ("pt-BR", "pt-BR"),
            ("pt-br,pt;q=0.9", "pt-BR"),
            ("pt-PT", "pt-BR"),
            ("pt", "pt-BR"),
            ("en-US,en;q=0.9", "en"),
            ("fr-FR, pt;q=0.8", "pt-BR"),
            ("fr-FR, de", "en"),
            ("*", "en"),
        ],
    )
    def test_negotiation(self, header: str | None, expected: str) -> None:
        assert negotiate_locale(header) == expected

    def test_default_locale_used_when_nothing_matches(self) -> None:
        assert negotiate_locale("de", default="pt-BR") == "pt-BR"

    def test_unsupported_default_falls_back_to_english(self) -> None:
        assert negotiate_locale(None, default="de") == "en"
