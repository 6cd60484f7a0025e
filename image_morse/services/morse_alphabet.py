"""Таблица цифр Морзе: десять фиксированных групп по пять символов.

Принципы:
- Чистые данные: таблица статическая, двунаправленная, без состояния вызова.
"""
from __future__ import annotations

from typing import Dict, Tuple

from image_morse.models.errors import InvalidSymbol

DOT = "."
DASH = "-"
GROUP_LENGTH = 5

# index == digit
DIGITS_IN_MORSE: Tuple[str, ...] = (
    "-----",  # 0
    ".----",  # 1
    "..---",  # 2
    "...--",  # 3
    "....-",  # 4
    ".....",  # 5
    "-....",  # 6
    "--...",  # 7
    "---..",  # 8
    "----.",  # 9
)

MORSE_TO_DIGIT: Dict[str, int] = {pattern: digit for digit, pattern in enumerate(DIGITS_IN_MORSE)}

_SYMBOLS = frozenset((DOT, DASH))


class MorseAlphabet:
    """Биекция между цифрами 0–9 и их пятисимвольными шаблонами Морзе."""

    def digit_to_morse(self, digit: int) -> str:
        """Возвращает группу Морзе для цифры.

        Raises:
            InvalidSymbol: если значение не является цифрой 0–9.
        """
        # bool is an int subclass, but True is not a digit here
        if isinstance(digit, bool) or not isinstance(digit, int) or not 0 <= digit <= 9:
            raise InvalidSymbol(f"Не цифра: {digit!r}")
        return DIGITS_IN_MORSE[digit]

    def morse_to_digit(self, group: str) -> int:
        """Возвращает цифру для пятисимвольной группы Морзе.

        Raises:
            InvalidSymbol: если группа не из пяти символов '.'/'-' или не совпадает ни с одним шаблоном.
        """
        if len(group) != GROUP_LENGTH:
            raise InvalidSymbol(f"Группа должна состоять из {GROUP_LENGTH} символов: {group!r}")
        stray = set(group) - _SYMBOLS
        if stray:
            raise InvalidSymbol(f"Недопустимые символы {sorted(stray)!r} в группе {group!r}")
        try:
            return MORSE_TO_DIGIT[group]
        except KeyError as exc:
            raise InvalidSymbol(f"Неизвестная группа Морзе: {group!r}") from exc