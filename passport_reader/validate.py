# -*- coding: utf-8 -*-
"""
Validation — бизнес-правила для IdentityRecord: errors блокируют, warnings нет.
Ничего не бросает; решение о фатальности принимает вызывающий код.
"""
import re
from datetime import date, datetime
from typing import Optional

from passport_reader.schemas import IdentityRecord, ValidationOutcome

DOCUMENT_NUMBER_RE = re.compile(r"^[A-Z0-9]{6,9}$")
MAX_AGE_YEARS = 120
EXPIRY_WARNING_DAYS = 180
CONFIDENCE_ERROR = 50
CONFIDENCE_WARNING = 75


def parse_ddmmyyyy(s: Optional[str]) -> Optional[date]:
    if not s or not re.fullmatch(r"\d{2}/\d{2}/\d{4}", s.strip()):
        return None
    try:
        return datetime.strptime(s.strip(), "%d/%m/%Y").date()
    except ValueError:
        return None


def _validate_required(record: IdentityRecord) -> list[str]:
    errors = []
    number = record.document_number.strip()
    if not number:
        errors.append("Passport number is missing.")
    elif not DOCUMENT_NUMBER_RE.match(number):
        errors.append(
            f'Passport number "{record.document_number}" looks invalid '
            f"(expected 6-9 alphanumeric characters)."
        )
    if not record.surname.strip():
        errors.append("Surname is missing.")
    if not record.given_names.strip():
        errors.append("Given name(s) are missing.")
    if not record.nationality.strip():
        errors.append("Nationality is missing.")
    return errors


def _validate_birth_date(record: IdentityRecord, today: date) -> tuple[list[str], list[str]]:
    value = record.date_of_birth.strip()
    if not value:
        return ["Date of birth is missing."], []
    dob = parse_ddmmyyyy(value)
    if not dob:
        return [f'Date of birth "{value}" could not be parsed (expected DD/MM/YYYY).'], []
    if dob > today:
        return [f'Date of birth "{value}" is in the future, OCR likely misread the date.'], []
    age = (today - dob).days / 365.25
    if age > MAX_AGE_YEARS:
        return [f'Date of birth "{value}" implies age > {MAX_AGE_YEARS} years, OCR likely misread the date.'], []
    if age < 1:
        return [], [f"Applicant age appears to be less than 1 year, please verify date of birth: {value}"]
    return [], []


def _validate_expiry(record: IdentityRecord, today: date) -> tuple[list[str], list[str]]:
    value = record.expiry_date.strip()
    if not value:
        return ["Passport expiry date is missing."], []
    expiry = parse_ddmmyyyy(value)
    if not expiry:
        return [f'Expiry date "{value}" could not be parsed (expected DD/MM/YYYY).'], []
    if expiry < today:
        return [f"Passport is expired (expiry: {value})."], []
    days_left = (expiry - today).days
    # 180-й день включительно: предупреждение, не ошибка
    if days_left <= EXPIRY_WARNING_DAYS:
        return [], [
            f"Passport expires in {days_left} days ({value}). "
            f"Some countries require 6 months validity."
        ]
    return [], []


def _validate_confidence(confidence: Optional[float]) -> tuple[list[str], list[str]]:
    if confidence is None:
        return [], []
    if confidence < CONFIDENCE_ERROR:
        return [f"OCR confidence is very low ({confidence:.1f}%). Image may be too blurry or dark."], []
    if confidence < CONFIDENCE_WARNING:
        return [], [f"OCR confidence is moderate ({confidence:.1f}%). Review extracted data carefully."]
    return [], []


def validate_record(
    record: IdentityRecord,
    ocr_confidence: Optional[float] = None,
    today: Optional[date] = None,
) -> ValidationOutcome:
    """Применить все правила к записи"""
    today = today or date.today()
    errors = _validate_required(record)
    warnings = []

    for errs, warns in (
        _validate_birth_date(record, today),
        _validate_expiry(record, today),
    ):
        errors.extend(errs)
        warnings.extend(warns)

    if record.gender == "Unspecified":
        warnings.append("Gender could not be determined from MRZ. Please verify manually.")

    errs, warns = _validate_confidence(ocr_confidence)
    errors.extend(errs)
    warnings.extend(warns)

    return ValidationOutcome(valid=not errors, errors=errors, warnings=warnings)
