# -*- coding: utf-8 -*-
"""
Неизменяемые таблицы: алфавит путаницы OCR, многоязычные метки VIZ, месяцы.
Передаются в компоненты параметром, по умолчанию — DEFAULT_*.
"""
import re
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Mapping, Optional

FILLER = "<"
ZONE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789" + FILLER
ZONE_LINE_LENGTH = 44


@dataclass(frozen=True)
class ConfusionTable:
    """Символы, которые OCR путает в MRZ"""
    filler: str = FILLER
    # '<' чаще всего читается как C или L
    filler_lookalikes: str = "CL"
    ambiguous_pairs: tuple = (("O", "0"), ("I", "1"))
    # 2^9 = 512 вариантов на 9-символьный номер документа
    max_ambiguous: int = 9

    def alternatives(self, char: str) -> Optional[tuple]:
        for pair in self.ambiguous_pairs:
            if char in pair:
                return pair
        return None

    @cached_property
    def _filler_class(self) -> str:
        return "[" + re.escape(self.filler_lookalikes + self.filler) + "]"

    @cached_property
    def separator_run(self) -> re.Pattern:
        """Серия из 2+ символов-заполнителей (или похожих на них)"""
        return re.compile(self._filler_class + "{2,}")

    @cached_property
    def filler_run(self) -> re.Pattern:
        return re.compile(self._filler_class + "+")

    @cached_property
    def noise_token(self) -> re.Pattern:
        return re.compile("^[" + re.escape(self.filler_lookalikes) + "]+$")

    @cached_property
    def noise_run(self) -> re.Pattern:
        return re.compile("[" + re.escape(self.filler_lookalikes) + "]{3,}")


def _patterns(*sources: str) -> tuple:
    return tuple(re.compile(s, re.I) for s in sources)


@dataclass(frozen=True)
class VizLabels:
    """Метки полей визуальной зоны на разных языках"""
    birth_place: tuple = _patterns(
        r"place\s+of\s+birth",          # en
        r"lieu\s+de\s+naissance",       # fr
        r"geburtsort",                  # de
        r"lugar\s+de\s+nacimiento",     # es
        r"luogo\s+di\s+nascita",        # it
        r"local\s+de\s+nascimento",     # pt
        r"geboorteplaats",              # nl
        r"born\s+in",
    )
    place_of_issue: tuple = _patterns(
        r"place\s+of\s+issue",
        r"lieu\s+de\s+d[eé]livrance",
        r"ausstellungsort",
        r"lugar\s+de\s+expedici[oó]n",
        r"luogo\s+di\s+rilascio",
        r"local\s+de\s+emiss[aã]o",
        r"plaats\s+van\s+afgifte",
    )
    issue_date: tuple = _patterns(
        r"date\s+of\s+issue",
        r"date\s+of\s+issuance",
        r"issued\s+on",
        r"date\s+de\s+d[eé]livrance",
        r"ausstellungsdatum",
        r"fecha\s+de\s+expedici[oó]n",
        r"data\s+di\s+rilascio",
        r"datum\s+van\s+afgifte",
    )
    months: Mapping = field(default_factory=lambda: MappingProxyType({
        "JAN": "01", "FEB": "02", "MAR": "03", "APR": "04", "MAY": "05", "JUN": "06",
        "JUL": "07", "AUG": "08", "SEP": "09", "OCT": "10", "NOV": "11", "DEC": "12",
    }))

    @property
    def all_labels(self) -> tuple:
        return self.birth_place + self.place_of_issue + self.issue_date


DEFAULT_CONFUSION = ConfusionTable()
DEFAULT_LABELS = VizLabels()
