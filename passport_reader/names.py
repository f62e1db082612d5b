# -*- coding: utf-8 -*-
"""
Запасной разбор имени, когда OCR прочитал разделитель '<<' как CC/LL/CL/LC.

Строка 1 TD3: P<UTOSURNAME<<GIVEN<NAMES<<<<... — без настоящего '<<' фамилию
и имена не разделить, поэтому ищем первую серию «заполнителей» не ближе
3 символов от начала зоны имени (MCCALL, LLOYD и т.п. не режем).
"""
import logging
from typing import Optional

from passport_reader.tables import DEFAULT_CONFUSION, ConfusionTable

logger = logging.getLogger(__name__)

NAME_ZONE_START = 5
MIN_SURNAME_LENGTH = 3
MIN_TOKEN_LENGTH = 2


def recover_names(
    line1: str,
    confusion: ConfusionTable = DEFAULT_CONFUSION,
) -> Optional[tuple[str, str]]:
    """(surname, given_names) из сырой строки 1 или None"""
    if not line1 or len(line1) <= NAME_ZONE_START:
        return None
    zone = line1[NAME_ZONE_START:]

    for m in confusion.separator_run.finditer(zone):
        if m.start() < MIN_SURNAME_LENGTH:
            continue
        surname = zone[: m.start()]
        tokens = [t for t in confusion.filler_run.split(zone[m.end():]) if len(t) >= MIN_TOKEN_LENGTH]
        if not tokens:
            continue
        given_names = " ".join(tokens)
        logger.info("Fallback name split: %d + %d token(s)", len(surname), len(tokens))
        return surname, given_names

    return None
