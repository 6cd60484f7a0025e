import pytest

from image_morse.models.errors import InvalidSymbol
from image_morse.services.morse_alphabet import DIGITS_IN_MORSE, MorseAlphabet


@pytest.fixture
def alphabet() -> MorseAlphabet:
    return MorseAlphabet()


def test_every_digit_round_trips(alphabet):
    for digit in range(10):
        assert alphabet.morse_to_digit(alphabet.digit_to_morse(digit)) == digit


def test_patterns_are_distinct_five_symbol_groups():
    assert len(set(DIGITS_IN_MORSE)) == 10
    assert all(len(p) == 5 and set(p) <= {".", "-"} for p in DIGITS_IN_MORSE)


def test_standard_table(alphabet):
    assert alphabet.digit_to_morse(0) == "-----"
    assert alphabet.digit_to_morse(1) == ".----"
    assert alphabet.digit_to_morse(5) == "....."
    assert alphabet.digit_to_morse(9) == "----."


@pytest.mark.parametrize("group", [".-.-.", "....x", "abcde", "....", "......", ""])
def test_bad_groups_raise_invalid_symbol(alphabet, group):
    with pytest.raises(InvalidSymbol):
        alphabet.morse_to_digit(group)


@pytest.mark.parametrize("value", [-1, 10, True, "3"])
def test_non_digits_raise_invalid_symbol(alphabet, value):
    with pytest.raises(InvalidSymbol):
        alphabet.digit_to_morse(value)
