# -*- coding: utf-8 -*-
"""Tesseract OCR engine"""
import logging

import cv2
import numpy as np
import pytesseract

from passport_reader.config import OCR_LANG, OCR_SCALE, TESSERACT_CMD
from passport_reader.ocr_engines.base import OCREngine, RawScanResult
from passport_reader.schemas import ScanConfig

logger = logging.getLogger(__name__)


def build_tesseract_config(scan: ScanConfig) -> str:
    """Строка параметров tesseract: LSTM, PSM, DPI и whitelist"""
    parts = ["--oem 1", f"--psm {int(scan.page_seg_mode)}", f"--dpi {scan.dpi}"]
    if scan.whitelist:
        parts.append(f"-c tessedit_char_whitelist={scan.whitelist}")
        parts.append("-c preserve_interword_spaces=0")
    return " ".join(parts)


def mean_confidence(data: dict) -> float:
    """Средняя confidence слов из image_to_data; -1 (не текст) пропускаем"""
    confs = []
    for c in data.get("conf", []):
        try:
            v = float(c)
        except (TypeError, ValueError):
            continue
        if v >= 0:
            confs.append(v)
    return sum(confs) / len(confs) if confs else 0.0


class TesseractEngine(OCREngine):
    """Tesseract OCR (eng)"""

    def __init__(self, lang: str | None = None, scale: float | None = None, cmd: str | None = None):
        self.lang = lang or OCR_LANG
        self.scale = scale if scale is not None else OCR_SCALE
        self.cmd = cmd or TESSERACT_CMD

    @property
    def name(self) -> str:
        return "tesseract"

    def start(self) -> None:
        if self.cmd:
            pytesseract.pytesseract.tesseract_cmd = self.cmd

    def _prepare(self, image: np.ndarray) -> np.ndarray:
        if len(image.shape) == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            gray = image
        if self.scale and self.scale != 1:
            gray = cv2.resize(gray, None, fx=self.scale, fy=self.scale, interpolation=cv2.INTER_CUBIC)
        return gray

    def recognize(self, image: np.ndarray, config: ScanConfig) -> RawScanResult:
        gray = self._prepare(image)
        tess_config = build_tesseract_config(config)
        try:
            text = pytesseract.image_to_string(gray, lang=self.lang, config=tess_config)
            data = pytesseract.image_to_data(
                gray, lang=self.lang, config=tess_config, output_type=pytesseract.Output.DICT
            )
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as e:
            logger.warning("Tesseract failed (psm %s): %s", int(config.page_seg_mode), e)
            return RawScanResult(text="", confidence=0.0, engine=self.name)
        conf = mean_confidence(data)
        return RawScanResult(text=text or "", confidence=min(100.0, max(0.0, conf)), engine=self.name)
