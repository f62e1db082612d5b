# -*- coding: utf-8 -*-
"""Общие фикстуры: поддельный OCR-движок и тестовое изображение"""
import pytest
from PIL import Image

from passport_reader.ocr_engines.base import OCREngine, RawScanResult

LINE1 = "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<"
LINE2 = "L898902C36UTO7408122F1204159ZE184226B<<<<<10"

VIZ_TEXT = """UTOPIA PASSPORT
Surname / Nom
ERIKSSON
Place of birth / Lieu de naissance
ZENITH
Date of issue / Date de délivrance
16 APR 2007
"""


class FakeEngine(OCREngine):
    """
    Движок с заготовленными ответами: zone_texts — по одному на проход MRZ
    (с whitelist), viz_text — для прохода без whitelist.
    """

    def __init__(self, zone_texts=(), viz_text="", confidence=90.0, fail_on=None):
        self.zone_texts = list(zone_texts)
        self.viz_text = viz_text
        self.confidence = confidence
        self.fail_on = fail_on
        self.calls = []
        self.started = 0
        self.stopped = 0

    @property
    def name(self) -> str:
        return "fake"

    def start(self) -> None:
        self.started += 1

    def stop(self) -> None:
        self.stopped += 1

    def recognize(self, image, config) -> RawScanResult:
        self.calls.append(config)
        if self.fail_on is not None and config.page_seg_mode == self.fail_on:
            raise RuntimeError("engine crashed")
        if config.whitelist is None:
            return RawScanResult(text=self.viz_text, confidence=self.confidence, engine=self.name)
        n = sum(1 for c in self.calls if c.whitelist) - 1
        text = self.zone_texts[min(n, len(self.zone_texts) - 1)] if self.zone_texts else ""
        return RawScanResult(text=text, confidence=self.confidence, engine=self.name)


@pytest.fixture
def make_engine():
    return FakeEngine


@pytest.fixture
def passport_image(tmp_path):
    path = tmp_path / "passport.png"
    Image.new("RGB", (600, 400), color="white").save(path)
    return path


@pytest.fixture
def zone_text():
    return f"UTOPIA\n{LINE1}\n{LINE2}\n"
