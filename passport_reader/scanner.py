# -*- coding: utf-8 -*-
"""
Вызов OCR-движка и перебор режимов сегментации до нахождения двух строк MRZ
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from passport_reader.config import OCR_DPI
from passport_reader.detect import extract_zone_lines
from passport_reader.ocr_engines import OCREngine, RawScanResult, engine_session, get_engine
from passport_reader.schemas import DEFAULT_STRATEGIES, ZONE_WHITELIST, PageSegMode, ScanConfig

logger = logging.getLogger(__name__)


class TextScanner:
    """Один вызов OCR = одна сессия движка (start → recognize → stop)"""

    def __init__(self, engine: Optional[OCREngine] = None, dpi: int = OCR_DPI):
        self.engine = engine or get_engine()
        self.dpi = dpi

    @property
    def engine_name(self) -> str:
        return self.engine.name

    def scan(self, image: np.ndarray, config: ScanConfig) -> RawScanResult:
        with engine_session(self.engine) as engine:
            result = engine.recognize(image, config)
        logger.debug(
            "OCR %s psm=%d: %d chars, confidence %.1f",
            engine.name, int(config.page_seg_mode), len(result.text), result.confidence,
        )
        return result


@dataclass
class ZoneScan:
    """Итог поиска MRZ: строки (0–2), последний сырой текст, confidence"""
    lines: list = field(default_factory=list)
    text: str = ""
    confidence: float = 0.0
    page_seg_mode: Optional[PageSegMode] = None
    attempts: int = 0

    @property
    def found(self) -> bool:
        return len(self.lines) >= 2


def scan_zone(
    scanner: TextScanner,
    image: np.ndarray,
    strategies: tuple = DEFAULT_STRATEGIES,
) -> ZoneScan:
    """
    Режимы пробуются по порядку; первый, давший 2 строки, побеждает.
    Если ни один не дал — возвращается результат последней попытки.
    """
    last = ZoneScan()
    for attempt, psm in enumerate(strategies, 1):
        if attempt > 1:
            logger.info("Retrying MRZ scan with PSM %d (pass %d)", int(psm), attempt)
        config = ScanConfig(whitelist=ZONE_WHITELIST, page_seg_mode=psm, dpi=scanner.dpi)
        raw = scanner.scan(image, config)
        lines = extract_zone_lines(raw.text)
        last = ZoneScan(
            lines=lines, text=raw.text, confidence=raw.confidence,
            page_seg_mode=psm, attempts=attempt,
        )
        if last.found:
            logger.info("MRZ found on pass %d (PSM %d), confidence %.1f", attempt, int(psm), raw.confidence)
            return last
        logger.warning("Pass %d: found %d MRZ line(s)", attempt, len(lines))

    logger.warning("All page segmentation modes exhausted, MRZ not detected")
    return last
