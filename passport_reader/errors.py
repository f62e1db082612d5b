# -*- coding: utf-8 -*-
"""
Ошибки пайплайна. Каждая прерывает обработку только текущего изображения.
"""
from typing import Optional


class PassportReaderError(Exception):
    """Базовая ошибка: сообщение + confidence OCR (если известна)"""

    def __init__(self, message: str, confidence: Optional[float] = None):
        super().__init__(message)
        self.message = message
        self.confidence = confidence


class IngestError(PassportReaderError):
    """Файл не найден, неподдерживаемый формат или слишком большой"""


class DetectionError(PassportReaderError):
    """Две строки MRZ не найдены ни в одном режиме сегментации"""


class DecodeError(PassportReaderError):
    """MRZ не разбирается на поля (ошибка структуры, не качества данных)"""


class ValidationFailed(PassportReaderError):
    """Запись не прошла блокирующие проверки"""

    def __init__(self, outcome, record=None, confidence: Optional[float] = None):
        report = "\n".join(f"  - {e}" for e in outcome.errors)
        super().__init__(
            f"Passport validation failed: {len(outcome.errors)} error(s):\n{report}",
            confidence=confidence,
        )
        self.outcome = outcome
        self.record = record


class EngineError(PassportReaderError):
    """Сбой OCR-движка или предобработки на этом изображении"""
