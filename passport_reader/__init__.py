# -*- coding: utf-8 -*-
"""
Passport reader — распознавание MRZ и полей VIZ на странице паспорта с фото
"""
from passport_reader.errors import (
    DecodeError,
    DetectionError,
    EngineError,
    IngestError,
    PassportReaderError,
    ValidationFailed,
)
from passport_reader.schemas import IdentityRecord, PassportResult, ValidationOutcome
from passport_reader.pipeline import process_passport, process_passport_async, process_passport_from_bytes

__all__ = [
    "IdentityRecord",
    "PassportResult",
    "ValidationOutcome",
    "PassportReaderError",
    "IngestError",
    "DetectionError",
    "DecodeError",
    "EngineError",
    "ValidationFailed",
    "process_passport",
    "process_passport_async",
    "process_passport_from_bytes",
]
