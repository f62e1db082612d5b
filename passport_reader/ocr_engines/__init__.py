# -*- coding: utf-8 -*-
"""Плагинные OCR-движки"""
import logging

from passport_reader.config import OCR_ENGINE
from passport_reader.ocr_engines.base import OCREngine, RawScanResult, engine_session
from passport_reader.ocr_engines.tesseract_engine import TesseractEngine

logger = logging.getLogger(__name__)

__all__ = ["OCREngine", "RawScanResult", "engine_session", "get_engine", "TesseractEngine"]


def get_engine(name: str | None = None) -> OCREngine:
    """Получить OCR-движок по имени. name: tesseract|easyocr"""
    engine = (name or OCR_ENGINE).lower()
    if engine == "easyocr":
        from passport_reader.ocr_engines.easyocr_engine import EasyOCREngine
        return EasyOCREngine()
    if engine != "tesseract":
        logger.warning("Unknown OCR engine %r, using tesseract", engine)
    return TesseractEngine()
