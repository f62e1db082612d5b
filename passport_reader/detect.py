# -*- coding: utf-8 -*-
"""
Поиск двух строк MRZ (TD3, 2 × 44 символа) в сыром OCR-тексте
"""
import re

from passport_reader.tables import FILLER, ZONE_LINE_LENGTH

_EXACT = re.compile(rf"^[A-Z0-9{FILLER}]{{{ZONE_LINE_LENGTH}}}$")
_RELAXED = re.compile(rf"^[A-Z0-9{FILLER}]{{38,46}}$")


def _candidate_lines(raw_text: str) -> list[str]:
    return [re.sub(r"\s", "", ln).upper() for ln in raw_text.replace("\r", "\n").split("\n")]


def fit_line(line: str, length: int = ZONE_LINE_LENGTH) -> str:
    """Дополнить заполнителем или обрезать до 44"""
    return line.ljust(length, FILLER) if len(line) < length else line[:length]


def extract_zone_lines(raw_text: str) -> list[str]:
    """
    Строки MRZ из текста.
    Сначала точные 44-символьные строки; если их меньше двух —
    строки длиной 38–46, приведённые к 44. Возвращает не больше двух.
    """
    if not raw_text:
        return []
    lines = _candidate_lines(raw_text)

    exact = [ln for ln in lines if _EXACT.match(ln)]
    if len(exact) >= 2:
        return exact[:2]

    relaxed = [fit_line(ln) for ln in lines if _RELAXED.match(ln)]
    return relaxed[:2]
