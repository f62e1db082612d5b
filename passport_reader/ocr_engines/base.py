# -*- coding: utf-8 -*-
"""
Базовый интерфейс OCR-движка
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import numpy as np

from passport_reader.schemas import ScanConfig


@dataclass
class RawScanResult:
    """Результат OCR: текст и confidence 0..100"""
    text: str
    confidence: float = 0.0
    engine: str = ""


class OCREngine(ABC):
    """Абстрактный OCR-движок. Ресурсы движка живут между start() и stop()."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def start(self) -> None:
        """Инициализировать движок"""

    def stop(self) -> None:
        """Освободить ресурсы движка"""

    @abstractmethod
    def recognize(self, image: np.ndarray, config: ScanConfig) -> RawScanResult:
        """Распознать текст на изображении"""
        pass


@contextmanager
def engine_session(engine: OCREngine) -> Iterator[OCREngine]:
    """start() до распознавания, stop() после — на любом пути выхода"""
    engine.start()
    try:
        yield engine
    finally:
        engine.stop()
