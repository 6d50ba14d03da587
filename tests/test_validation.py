"""Validators: text, age (through the number recognizer) and the opt-in email check."""

import pytest

from rsvpbot.utils.validation import ValidationUtils, TEXT_MESSAGE, age_message, leading_int


class TestValidateText:

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_blank_input_is_rejected(self, raw):
        res = ValidationUtils.validate_text(raw)
        assert not res["is_valid"]
        assert res["message"] == TEXT_MESSAGE

    def test_value_is_trimmed(self):
        res = ValidationUtils.validate_text("  Alice ")
        assert res["is_valid"]
        assert res["value"] == "Alice"


class TestValidateAge:

    @pytest.mark.parametrize("raw, expected", [
        ("18", 18),
        ("120", 120),
        ("twenty", 20),
        ("twenty five", 25),
    ])
    def test_accepted(self, recognizer, raw, expected):
        res = ValidationUtils.validate_age(raw, recognizer)
        assert res["is_valid"]
        assert res["value"] == expected

    @pytest.mark.parametrize("raw", ["17", "121", "twelve", "no idea", ""])
    def test_rejected(self, recognizer, raw):
        res = ValidationUtils.validate_age(raw, recognizer)
        assert not res["is_valid"]
        assert res["value"] is None
        assert res["message"] == age_message(18, 120)

    def test_first_candidate_in_range_wins(self):
        res = ValidationUtils.validate_age("x", lambda text, culture: ["5", "30", "40"])
        assert res["value"] == 30

    def test_recognizer_error_becomes_reprompt(self):
        def broken(text, culture):
            raise RuntimeError("model unavailable")

        res = ValidationUtils.validate_age("25", broken)
        assert not res["is_valid"]
        assert res["message"] == age_message(18, 120)

    def test_custom_bounds(self):
        res = ValidationUtils.validate_age("x", lambda text, culture: ["16"], min_age=16, max_age=99)
        assert res["value"] == 16

    def test_decimal_resolution_uses_integer_part(self):
        assert leading_int("25.5") == 25
        assert leading_int("abc") is None


class TestValidateEmail:

    def test_well_formed_address_is_lowercased(self):
        res = ValidationUtils.validate_email(" Bob@X.com ")
        assert res["is_valid"]
        assert res["value"] == "bob@x.com"

    @pytest.mark.parametrize("raw", ["", "bob", "bob@", "bob@x"])
    def test_malformed_address_is_rejected(self, raw):
        assert not ValidationUtils.validate_email(raw)["is_valid"]
