"""Tests for the translation setup."""

from pdfcollate.utils.i18n import DOMAIN, _


class TestTranslations:
    def test_domain(self):
        assert DOMAIN == "pdfcollate"

    def test_untranslated_messages_pass_through(self):
        assert _("{0} file(s) loaded") == "{0} file(s) loaded"
