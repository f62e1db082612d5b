# -*- coding: utf-8 -*-
"""
Схемы данных: конфигурация скана, строки MRZ, запись личности, результат проверки
"""
from enum import IntEnum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from passport_reader.tables import ZONE_ALPHABET, ZONE_LINE_LENGTH


class PageSegMode(IntEnum):
    """Режимы сегментации страницы (нумерация Tesseract)"""
    AUTO = 3
    SINGLE_BLOCK = 6
    SPARSE_TEXT = 11


# Порядок попыток: стандартный блок → разреженный текст → авто
DEFAULT_STRATEGIES = (PageSegMode.SINGLE_BLOCK, PageSegMode.SPARSE_TEXT, PageSegMode.AUTO)

ZONE_WHITELIST = ZONE_ALPHABET


class ScanConfig(BaseModel):
    """Параметры одного вызова OCR"""
    model_config = ConfigDict(frozen=True)

    whitelist: Optional[str] = None
    page_seg_mode: PageSegMode = PageSegMode.SINGLE_BLOCK
    dpi: int = Field(default=300, gt=0)


class LinePair(BaseModel):
    """Две строки MRZ по 44 символа"""
    model_config = ConfigDict(frozen=True)

    line1: str
    line2: str

    @field_validator("line1", "line2")
    @classmethod
    def _check_line(cls, v: str) -> str:
        if len(v) != ZONE_LINE_LENGTH:
            raise ValueError(f"MRZ line must be {ZONE_LINE_LENGTH} characters, got {len(v)}")
        bad = set(v) - set(ZONE_ALPHABET)
        if bad:
            raise ValueError(f"MRZ line contains invalid characters: {''.join(sorted(bad))}")
        return v


Gender = Literal["Male", "Female", "Unspecified"]


class IdentityRecord(BaseModel):
    """
    Запись личности. Поля MRZ задаются один раз при разборе;
    birth_place / place_of_issue / issue_date добавляются позже через model_copy().
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    surname: str = ""
    given_names: str = ""
    full_name: str = ""
    document_number: str = ""
    nationality: str = ""
    issuing_country: str = ""
    date_of_birth: str = ""
    expiry_date: str = ""
    gender: Gender = "Unspecified"
    personal_number: str = ""
    birth_place: str = ""
    place_of_issue: str = ""
    issue_date: str = ""
    raw_line1: str = ""
    raw_line2: str = ""

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class VizFields(BaseModel):
    """Поля визуальной зоны; '' — поле не найдено"""
    birth_place: str = ""
    place_of_issue: str = ""
    issue_date: str = ""


class ZoneChecks(BaseModel):
    """Контрольные цифры MRZ (информативно, не влияет на valid)"""
    document_number_ok: bool = False
    document_number_corrected: bool = False
    birth_date_ok: bool = False
    expiry_date_ok: bool = False
    personal_number_ok: bool = False
    composite_ok: bool = False


class ValidationOutcome(BaseModel):
    """Итог проверки: errors блокируют, warnings — нет"""
    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class DebugInfo(BaseModel):
    """Отладочная информация (без PII)"""
    pipeline_version: str = "v1"
    timings_ms: dict = Field(default_factory=dict)
    ocr_engine: str = ""
    page_seg_mode: Optional[int] = None
    preprocess: dict = Field(default_factory=dict)


class PassportResult(BaseModel):
    """Единый результат обработки паспорта"""
    record: IdentityRecord
    validation: ValidationOutcome = Field(default_factory=ValidationOutcome)
    checks: ZoneChecks = Field(default_factory=ZoneChecks)
    confidence: float = 0.0
    debug: DebugInfo = Field(default_factory=DebugInfo)

    def to_dict(self) -> dict:
        d = self.model_dump()
        d["record"] = self.record.to_dict()
        return d
