"""Кодирование неотрицательных целых чисел в поток Морзе и обратно."""
from __future__ import annotations

from typing import List, Optional

from image_morse.models.errors import MalformedToken
from image_morse.services.morse_alphabet import GROUP_LENGTH, MorseAlphabet


class DigitCodec:
    """Число -> десятичная запись -> группы Морзе, склеенные без разделителя."""

    def __init__(self, alphabet: Optional[MorseAlphabet] = None) -> None:
        self._alphabet = alphabet or MorseAlphabet()

    def encode_integer(self, value: int) -> str:
        """Кодирует неотрицательное целое в токен Морзе.

        Пример: 2025 -> "..--------..---....." (по пять символов на цифру).

        Raises:
            ValueError: для отрицательных чисел и нецелых значений.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Ожидалось целое число, получено {value!r}")
        if value < 0:
            raise ValueError(f"Отрицательное число нельзя закодировать: {value}")
        return "".join(self._alphabet.digit_to_morse(int(ch)) for ch in str(value))

    def decode_integer(self, token: str) -> int:
        """Декодирует токен Морзе обратно в число.

        Raises:
            MalformedToken: если длина токена не положительное кратное пяти
                или число слишком длинное для преобразования в int.
            InvalidSymbol: если какая-то группа не является цифрой Морзе.
        """
        groups = self.split_groups(token)
        digits = "".join(str(self._alphabet.morse_to_digit(group)) for group in groups)
        try:
            return int(digits)
        except ValueError as exc:
            # int() refuses decimal strings beyond sys.get_int_max_str_digits()
            raise MalformedToken(f"Слишком длинное число в токене: {len(digits)} цифр") from exc

    @staticmethod
    def split_groups(token: str) -> List[str]:
        """Делит токен на последовательные группы по пять символов слева направо."""
        if not token or len(token) % GROUP_LENGTH != 0:
            raise MalformedToken(
                f"Длина токена должна быть положительной и кратной {GROUP_LENGTH}: {token!r}"
            )
        return [token[i:i + GROUP_LENGTH] for i in range(0, len(token), GROUP_LENGTH)]
