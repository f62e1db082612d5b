# -*- coding: utf-8 -*-
"""
Поля визуальной зоны (VIZ), которых нет в MRZ: место рождения, место выдачи,
дата выдачи. Второй проход OCR без whitelist + поиск по многоязычным меткам.
Не найденное поле — пустая строка, а не ошибка.
"""
import logging
import re

from passport_reader.schemas import PageSegMode, ScanConfig, VizFields
from passport_reader.tables import DEFAULT_LABELS, VizLabels

logger = logging.getLogger(__name__)

# Сколько строк после метки просматривать
LOOKAHEAD = 2

_NUMERIC_DATE = re.compile(r"\b(\d{2})[/\-.](\d{2})[/\-.](\d{4})\b")
_ALPHA_DATE = re.compile(r"\b(\d{1,2})\s+([A-Za-z]{3,4})\s+(\d{4})\b")


def _lines(text: str) -> list[str]:
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def extract_after_label(line: str, pattern: re.Pattern) -> str:
    """
    Текст после метки по позиции совпадения, а не replace():
    в двуязычных строках перед английской меткой стоит текст на другом языке.
    """
    m = pattern.search(line)
    if not m:
        return ""
    return re.sub(r"^[\s:/|]+", "", line[m.end():]).strip()


def extract_date(s: str, labels: VizLabels = DEFAULT_LABELS) -> str:
    """DD/MM/YYYY из 'DD/MM/YYYY', 'DD-MM-YYYY', 'DD.MM.YYYY' или 'DD MON YYYY'"""
    m = _NUMERIC_DATE.search(s)
    if m:
        return f"{m.group(1)}/{m.group(2)}/{m.group(3)}"
    for m in _ALPHA_DATE.finditer(s):
        mm = labels.months.get(m.group(2).upper()[:3])
        if mm:
            return f"{m.group(1).zfill(2)}/{mm}/{m.group(3)}"
    return ""


def _is_label(line: str, labels: VizLabels) -> bool:
    return any(p.search(line) for p in labels.all_labels)


def strip_labels(text: str, labels: VizLabels = DEFAULT_LABELS) -> str:
    """
    Срезать подряд идущие метки: в двуязычном заголовке
    "Place of birth / Lieu de naissance ZENITH" значение стоит после второй.
    """
    while True:
        pattern = next((p for p in labels.all_labels if p.search(text)), None)
        if pattern is None:
            return text
        text = extract_after_label(text, pattern)


def find_field(text: str, patterns: tuple, labels: VizLabels = DEFAULT_LABELS) -> str:
    """
    Значение после метки на той же строке, иначе на одной из следующих двух.
    Пропускаем строки с ':' и строки с любой известной меткой.
    """
    lines = _lines(text)
    for i, line in enumerate(lines):
        for pattern in patterns:
            if not pattern.search(line):
                continue
            after = strip_labels(extract_after_label(line, pattern), labels)
            if len(after) > 1:
                return after.upper()
            for candidate in lines[i + 1 : i + 1 + LOOKAHEAD]:
                if len(candidate) > 1 and ":" not in candidate and not _is_label(candidate, labels):
                    return candidate.upper()
    return ""


def find_date(text: str, patterns: tuple, labels: VizLabels = DEFAULT_LABELS) -> str:
    """Дата после метки на той же строке или на одной из следующих двух"""
    lines = _lines(text)
    for i, line in enumerate(lines):
        for pattern in patterns:
            if not pattern.search(line):
                continue
            d = extract_date(extract_after_label(line, pattern), labels)
            if d:
                return d
            for candidate in lines[i + 1 : i + 1 + LOOKAHEAD]:
                d = extract_date(candidate, labels)
                if d:
                    return d
    return ""


def parse_viz_fields(text: str, labels: VizLabels = DEFAULT_LABELS) -> VizFields:
    """Извлечь все поля VIZ из текста"""
    if not text or not text.strip():
        return VizFields()
    return VizFields(
        birth_place=find_field(text, labels.birth_place, labels),
        place_of_issue=find_field(text, labels.place_of_issue, labels),
        issue_date=find_date(text, labels.issue_date, labels),
    )


def scan_visual_fields(scanner, image, labels: VizLabels = DEFAULT_LABELS) -> VizFields:
    """Второй проход OCR (авто-сегментация, без whitelist) и разбор VIZ"""
    config = ScanConfig(whitelist=None, page_seg_mode=PageSegMode.AUTO, dpi=scanner.dpi)
    raw = scanner.scan(image, config)
    fields = parse_viz_fields(raw.text, labels)
    for name, value in fields.model_dump().items():
        logger.info("VIZ %s: %s", name, "found" if value else "(not detected)")
    return fields
