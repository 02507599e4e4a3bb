import pytest

from stepcalc.components.calculator.validator import (
    NOT_NUMERIC_ERROR,
    TOO_LONG_ERROR,
    validate,
)


@pytest.mark.parametrize("text", ["100", "abc", "1a2", "   ", "0000", "12345678901"])
def test_text_longer_than_two_characters_is_too_long(text):
    result = validate(text)
    assert result.error == TOO_LONG_ERROR == "Input is too long"
    assert result.value is None


@pytest.mark.parametrize("text", ["a", "1a", "a1", "-1", " 1", "1.", "²", "٣"])
def test_short_text_with_non_digit_is_not_numeric(text):
    result = validate(text)
    assert result.error == NOT_NUMERIC_ERROR == "Input is not numeric"
    assert result.value is None


@pytest.mark.parametrize("text", [str(i) for i in range(10)] + ["00", "07", "42", "99"])
def test_one_or_two_digits_are_valid(text):
    result = validate(text)
    assert result.error == ""
    assert result.is_valid
    assert result.value == int(text)


def test_length_rule_wins_over_numeric_rule():
    # "abc" breaks both rules; length is checked first
    assert validate("abc").error == TOO_LONG_ERROR


def test_empty_text_is_not_numeric():
    result = validate("")
    assert result.error == NOT_NUMERIC_ERROR
    assert result.value is None
    assert not result.is_valid
