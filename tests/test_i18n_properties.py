"""
Property-based tests for message translations.
"""

from hypothesis import given
from hypothesis import strategies as st

from hosts_editor.i18n import (
    DEFAULT_LANGUAGE,
    SUPPORTED_LANGUAGES,
    TRANSLATIONS,
    get_all_message_keys,
    get_message,
    get_missing_translations,
    validate_translations,
)


class TestTranslationCompleteness:
    """Every message exists in every supported language."""

    def test_no_missing_translations(self) -> None:
        assert validate_translations() == {language: set() for language in SUPPORTED_LANGUAGES}

    @given(language=st.sampled_from(sorted(SUPPORTED_LANGUAGES)))
    def test_get_missing_translations(self, language: str) -> None:
        assert get_missing_translations(language) == set()

    def test_unknown_language_reports_all_keys(self) -> None:
        assert get_missing_translations("fr") == get_all_message_keys()

    def test_placeholders_match_across_languages(self) -> None:
        import string

        formatter = string.Formatter()
        for key, translations in TRANSLATIONS.items():
            fields = {
                language: {name for _, name, _, _ in formatter.parse(text) if name}
                for language, text in translations.items()
            }
            assert fields["de"] == fields["en"], key


class TestGetMessage:
    """Message lookup and formatting."""

    @given(
        host=st.text(alphabet="abcdefghijklmnopqrstuvwxyz.-", min_size=1, max_size=30),
        language=st.sampled_from(sorted(SUPPORTED_LANGUAGES)),
    )
    def test_formatting(self, host: str, language: str) -> None:
        message = get_message("edit.added", language, host=host, address="10.0.0.1")
        assert host in message
        assert message.endswith("10.0.0.1")

    def test_fallback_to_default_language(self) -> None:
        assert get_message("edit.removed", "fr", host="a") == get_message(
            "edit.removed", DEFAULT_LANGUAGE, host="a",
        )
        assert get_message("edit.removed", None, host="a") == "[REMOVED] a"

    def test_unknown_key_returned(self) -> None:
        assert get_message("no.such.key", "de") == "no.such.key"

    def test_missing_arguments_leave_template(self) -> None:
        assert get_message("edit.removed", "en", other="x") == "[REMOVED] {host}"

    def test_german(self) -> None:
        assert get_message("error.host_not_specified", "de") == "Host nicht angegeben"
        assert get_message("error.prefix", "de", message="x") == "[FEHLER] x"
