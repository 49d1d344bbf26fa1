"""Tests for identifiers and the configuration data model."""

import pytest

from installer_l10n.domain import (
    ChangeSet,
    DesiredConfig,
    KeymapId,
    LocaleId,
    UpdateRequest,
)
from installer_l10n.exceptions import InvalidRequestError


class TestLocaleId:
    """Test locale identifier parsing."""

    def test_parse_without_encoding(self) -> None:
        """Test language and territory are split."""
        locale_id = LocaleId.parse("de_DE")

        assert locale_id == LocaleId("de", "DE")
        assert locale_id.code == "de_DE"
        assert str(locale_id) == "de_DE"

    def test_parse_with_encoding(self) -> None:
        """Test the encoding is kept in str() but not in code."""
        locale_id = LocaleId.parse("en_US.UTF-8")

        assert locale_id.encoding == "UTF-8"
        assert locale_id.code == "en_US"
        assert str(locale_id) == "en_US.UTF-8"

    def test_parse_strips_whitespace(self) -> None:
        """Test surrounding whitespace is ignored."""
        assert LocaleId.parse("  es_ES\n").code == "es_ES"

    @pytest.mark.parametrize("text", ["", "de", "DE_de", "de-DE", "C", "POSIX"])
    def test_parse_rejects_invalid(self, text: str) -> None:
        """Test malformed identifiers raise ValueError."""
        with pytest.raises(ValueError, match="Not a locale identifier"):
            LocaleId.parse(text)


class TestKeymapId:
    """Test keymap identifier parsing."""

    def test_layout_only(self) -> None:
        """Test a bare layout has no variant."""
        keymap_id = KeymapId.parse("us")

        assert keymap_id.layout == "us"
        assert keymap_id.variant is None
        assert str(keymap_id) == "us"

    def test_layout_with_variant(self) -> None:
        """Test the variant is parsed from parentheses."""
        keymap_id = KeymapId.parse("cz(qwerty)")

        assert keymap_id == KeymapId("cz", "qwerty")
        assert str(keymap_id) == "cz(qwerty)"

    @pytest.mark.parametrize("text", ["", "cz(", "cz()", "(qwerty)", "us us"])
    def test_parse_rejects_invalid(self, text: str) -> None:
        """Test malformed identifiers raise ValueError."""
        with pytest.raises(ValueError, match="Not a keymap identifier"):
            KeymapId.parse(text)


class TestDesiredConfig:
    """Test the mutable configuration record."""

    def test_copy_is_independent(self) -> None:
        """Test mutating a copy leaves the original untouched."""
        config = DesiredConfig(["en_US"], "us", "UTC", "en_US", "us")

        clone = config.copy()
        clone.locales.append("de_DE")
        clone.timezone = "Europe/Berlin"

        assert config.locales == ["en_US"]
        assert config.timezone == "UTC"

    def test_to_dict(self) -> None:
        """Test the external shape holds every field."""
        config = DesiredConfig(["en_US"], "us", "UTC", "en_US", "us")

        assert config.to_dict() == {
            "locales": ["en_US"],
            "keymap": "us",
            "timezone": "UTC",
            "ui_locale": "en_US",
            "ui_keymap": "us",
        }


class TestUpdateRequest:
    """Test building partial updates from decoded JSON."""

    def test_from_mapping_partial(self) -> None:
        """Test absent fields stay None."""
        update = UpdateRequest.from_mapping({"timezone": "Atlantic/Canary"})

        assert update.timezone == "Atlantic/Canary"
        assert update.locales is None
        assert update.present_fields() == ["timezone"]

    def test_from_mapping_null_is_absent(self) -> None:
        """Test null values count as absent."""
        update = UpdateRequest.from_mapping({"keymap": None, "locales": None})

        assert update.present_fields() == []

    def test_from_mapping_ignores_unknown_keys(self) -> None:
        """Test keys outside the model are ignored."""
        update = UpdateRequest.from_mapping({"hostname": "box", "keymap": "us"})

        assert update.present_fields() == ["keymap"]

    def test_from_mapping_locales_become_tuple(self) -> None:
        """Test the locale list is frozen."""
        update = UpdateRequest.from_mapping({"locales": ["de_DE", "en_US"]})

        assert update.locales == ("de_DE", "en_US")

    def test_present_fields_in_commit_order(self) -> None:
        """Test field names come out in validation order."""
        update = UpdateRequest(
            ui_keymap="us", locales=("en_US",), timezone="UTC"
        )

        assert update.present_fields() == ["locales", "timezone", "ui_keymap"]

    @pytest.mark.parametrize("data", [[], "timezone", 42, None])
    def test_from_mapping_rejects_non_object(self, data) -> None:
        """Test a non-object body is rejected."""
        with pytest.raises(InvalidRequestError, match="Expected a JSON object"):
            UpdateRequest.from_mapping(data)

    @pytest.mark.parametrize(
        ("data", "field"),
        [
            ({"locales": "en_US"}, "locales"),
            ({"locales": ["en_US", 1]}, "locales"),
            ({"timezone": 1}, "timezone"),
            ({"ui_keymap": ["us"]}, "ui_keymap"),
        ],
    )
    def test_from_mapping_rejects_wrong_types(self, data, field) -> None:
        """Test a present field of the wrong type names that field."""
        with pytest.raises(InvalidRequestError) as exc_info:
            UpdateRequest.from_mapping(data)

        assert exc_info.value.field == field


class TestChangeSet:
    """Test the record of applied fields."""

    def test_only_set_fields_are_reported(self) -> None:
        """Test unset fields are left out."""
        changes = ChangeSet(keymap="us", ui_locale="de_DE")

        assert changes.fields == ("keymap", "ui_locale")
        assert changes.to_dict() == {"keymap": "us", "ui_locale": "de_DE"}

    def test_to_dict_renders_locales_as_list(self) -> None:
        """Test locales are JSON friendly."""
        changes = ChangeSet(locales=("de_DE", "en_US"))

        assert changes.to_dict() == {"locales": ["de_DE", "en_US"]}

    def test_empty(self) -> None:
        """Test an empty change set renders as an empty dict."""
        assert ChangeSet().fields == ()
        assert ChangeSet().to_dict() == {}
