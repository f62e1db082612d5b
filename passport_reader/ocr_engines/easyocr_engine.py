# -*- coding: utf-8 -*-
"""EasyOCR engine (опционально, pip install .[easyocr])"""
import logging

from passport_reader.ocr_engines.base import OCREngine, RawScanResult
from passport_reader.schemas import ScanConfig

logger = logging.getLogger(__name__)


class EasyOCREngine(OCREngine):
    """EasyOCR. Reader создаётся в start() и освобождается в stop()."""

    def __init__(self, langs: tuple = ("en",), gpu: bool = False):
        self.langs = list(langs)
        self.gpu = gpu
        self._reader = None

    @property
    def name(self) -> str:
        return "easyocr"

    def start(self) -> None:
        import easyocr
        self._reader = easyocr.Reader(self.langs, gpu=self.gpu, verbose=False)

    def stop(self) -> None:
        self._reader = None

    def recognize(self, image, config: ScanConfig) -> RawScanResult:
        if self._reader is None:
            raise RuntimeError("EasyOCREngine.recognize() called outside engine_session()")
        # page_seg_mode у EasyOCR нет
        results = self._reader.readtext(image, allowlist=config.whitelist)
        lines = []
        total_conf = 0.0
        n = 0
        for (_, text, conf) in results:
            if text and conf > 0.1:
                lines.append(text)
                total_conf += conf
                n += 1
        text = "\n".join(lines)
        avg_conf = total_conf / n if n else 0.0
        return RawScanResult(text=text, confidence=min(100.0, avg_conf * 100), engine=self.name)
