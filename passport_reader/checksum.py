# -*- coding: utf-8 -*-
"""
Контрольные цифры MRZ (веса 7-3-1) и исправление путаницы O/0, I/1
"""
import logging

from passport_reader.tables import DEFAULT_CONFUSION, FILLER, ConfusionTable

logger = logging.getLogger(__name__)

WEIGHTS = (7, 3, 1)


def char_value(c: str) -> int:
    """'<' = 0, цифры — своё значение, A..Z = 10..35"""
    if c == FILLER:
        return 0
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "A" <= c <= "Z":
        return ord(c) - 55
    return 0


def check_digit(s: str) -> int:
    return sum(char_value(c) * WEIGHTS[i % 3] for i, c in enumerate(s)) % 10


def verify(s: str, digit: str) -> bool:
    """Совпадает ли контрольная цифра. Не цифра ('<' или мусор) — не совпадает."""
    if not digit.isdigit():
        return False
    return check_digit(s) == int(digit)


def correct_ambiguous(
    raw: str,
    expected: int,
    confusion: ConfusionTable = DEFAULT_CONFUSION,
) -> str:
    """
    Перебрать все 2^k вариантов для позиций O/0 и I/1, вернуть первый,
    дающий expected. Если такого нет — вернуть raw без изменений.
    """
    positions = []
    for i, c in enumerate(raw):
        alts = confusion.alternatives(c)
        if alts:
            positions.append((i, alts))
    if not positions:
        return raw
    if len(positions) > confusion.max_ambiguous:
        logger.warning(
            "Too many ambiguous characters (%d > %d), correction skipped",
            len(positions), confusion.max_ambiguous,
        )
        return raw

    # Порядок перебора: бит j маски выбирает вариант для j-й позиции
    for mask in range(2 ** len(positions)):
        chars = list(raw)
        for j, (idx, alts) in enumerate(positions):
            chars[idx] = alts[(mask >> j) & 1]
        candidate = "".join(chars)
        if check_digit(candidate) == expected:
            return candidate
    return raw
