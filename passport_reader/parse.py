# -*- coding: utf-8 -*-
"""
Разбор MRZ TD3 (паспорт, 2 × 44) в IdentityRecord.

Строка 1: [0:2] тип документа, [2:5] государство выдачи, [5:44] фамилия<<имена
Строка 2: [0:9] номер + [9] к.ц., [10:13] гражданство, [13:19] дата рождения + [19],
          [20] пол, [21:27] срок действия + [27], [28:42] личный номер + [42], [43] общая к.ц.
"""
import logging
import re
from datetime import date
from typing import Optional, Sequence

from pydantic import ValidationError

from passport_reader.checksum import correct_ambiguous, verify
from passport_reader.errors import DecodeError
from passport_reader.names import NAME_ZONE_START, recover_names
from passport_reader.schemas import IdentityRecord, LinePair, ZoneChecks
from passport_reader.tables import DEFAULT_CONFUSION, FILLER, ConfusionTable

logger = logging.getLogger(__name__)

# Век для YYMMDD: yy <= текущий год + 10 → 20yy, иначе 19yy
CENTURY_WINDOW = 10


def _clean(field: str) -> str:
    """'<' → пробел, лишние пробелы убрать"""
    return re.sub(r"\s+", " ", field.replace(FILLER, " ")).strip()


def format_zone_date(yymmdd: str, today: Optional[date] = None) -> str:
    """YYMMDD → DD/MM/YYYY. Не 6 цифр — вернуть как есть."""
    if not yymmdd or not re.fullmatch(r"\d{6}", yymmdd):
        return yymmdd
    today = today or date.today()
    yy, mm, dd = int(yymmdd[:2]), yymmdd[2:4], yymmdd[4:6]
    year = 2000 + yy if yy <= today.year % 100 + CENTURY_WINDOW else 1900 + yy
    return f"{dd}/{mm}/{year}"


def format_gender(code: str) -> str:
    if code == "M":
        return "Male"
    if code == "F":
        return "Female"
    return "Unspecified"


def split_name_field(name_zone: str) -> tuple[str, str]:
    """
    Фамилия и имена по разделителю '<<'.
    Без разделителя граница неизвестна: обе части получают весь текст,
    и равенство surname == given_names служит сигналом для recover_names().
    """
    if FILLER * 2 in name_zone:
        surname, rest = name_zone.split(FILLER * 2, 1)
        return _clean(surname), _clean(rest)
    whole = _clean(name_zone)
    return whole, whole


def clean_given_names(given_names: str, confusion: ConfusionTable = DEFAULT_CONFUSION) -> str:
    """
    Убрать шум заполнителя: токены только из C/L и токены с серией из 3+ C/L
    (в настоящих именах трёх одинаковых согласных подряд не бывает).
    """
    if not given_names:
        return ""
    return " ".join(
        w for w in given_names.split()
        if len(w) >= 2 and not confusion.noise_token.match(w) and not confusion.noise_run.search(w)
    )


def split_given_names(given_names: str) -> tuple[str, str]:
    """(first, middle) — однобуквенные токены считаем шумом"""
    parts = [w for w in given_names.split() if len(w) > 1]
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def _document_number(line2: str, confusion: ConfusionTable) -> str:
    raw = line2[0:9]
    digit = line2[9]
    if digit.isdigit() and not verify(raw, digit):
        corrected = correct_ambiguous(raw, int(digit), confusion=confusion)
        if corrected != raw:
            logger.info("Document number corrected by check digit %s", digit)
            raw = corrected
        else:
            logger.warning("Document number check digit mismatch, no correction found")
    return raw.replace(FILLER, "")


def decode_zone(
    lines: Sequence[str],
    today: Optional[date] = None,
    confusion: ConfusionTable = DEFAULT_CONFUSION,
) -> IdentityRecord:
    """Разобрать две строки MRZ. DecodeError — если структура не TD3."""
    if len(lines) < 2:
        raise DecodeError(f"Expected 2 MRZ lines, got {len(lines)}")
    try:
        pair = LinePair(line1=lines[0], line2=lines[1])
    except ValidationError as e:
        raise DecodeError(f"Failed to parse MRZ: {e.errors()[0]['msg']}") from e
    line1, line2 = pair.line1, pair.line2

    surname, given_names = split_name_field(line1[NAME_ZONE_START:])
    if surname and given_names and surname == given_names:
        logger.info("Surname equals given names, trying fallback name split")
        recovered = recover_names(line1, confusion=confusion)
        if recovered:
            surname, given_names = recovered
    given_names = clean_given_names(given_names, confusion=confusion)

    return IdentityRecord(
        surname=surname,
        given_names=given_names,
        full_name=f"{given_names} {surname}".strip(),
        document_number=_document_number(line2, confusion),
        nationality=_clean(line2[10:13]),
        issuing_country=_clean(line1[2:5]),
        date_of_birth=format_zone_date(line2[13:19], today=today),
        expiry_date=format_zone_date(line2[21:27], today=today),
        gender=format_gender(line2[20]),
        personal_number=_clean(line2[28:42]),
        raw_line1=line1,
        raw_line2=line2,
    )


def zone_checks(record: IdentityRecord) -> ZoneChecks:
    """Проверить все контрольные цифры строки 2"""
    line2 = record.raw_line2
    composite = line2[0:10] + line2[13:20] + line2[21:43]
    # исправленный номер по построению совпадает с контрольной цифрой
    corrected = record.document_number != line2[0:9].replace(FILLER, "")
    return ZoneChecks(
        document_number_ok=corrected or verify(line2[0:9], line2[9]),
        document_number_corrected=corrected,
        birth_date_ok=verify(line2[13:19], line2[19]),
        expiry_date_ok=verify(line2[21:27], line2[27]),
        # пустой личный номер допускает '<' или '0'
        personal_number_ok=verify(line2[28:42], line2[42])
        or (line2[28:43] == FILLER * 15),
        composite_ok=verify(composite, line2[43]),
    )
