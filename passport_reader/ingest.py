# -*- coding: utf-8 -*-
"""
Ingest — проверка входного файла и загрузка изображения
"""
from pathlib import Path

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from passport_reader.config import MAX_FILE_MB
from passport_reader.errors import IngestError

IMAGE_EXTS = (".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp")


def is_image(path: str) -> bool:
    return Path(path).suffix.lower() in IMAGE_EXTS


def check_input(image_path: str, max_file_mb: int = MAX_FILE_MB) -> Path:
    """Файл существует, это изображение и он не слишком большой"""
    path = Path(image_path)
    if not path.is_file():
        raise IngestError(f"File not found: {image_path}")
    if not is_image(str(path)):
        raise IngestError(f"Unsupported file format: {path.suffix or '(none)'}")
    size = path.stat().st_size
    if size > max_file_mb * 1024 * 1024:
        raise IngestError(f"File too large ({size / 1024 / 1024:.1f} MB, max {max_file_mb} MB)")
    return path


def load_image(image_path: str, max_file_mb: int = MAX_FILE_MB) -> np.ndarray:
    """Загрузить изображение в numpy array (BGR для OpenCV)"""
    path = check_input(image_path, max_file_mb=max_file_mb)
    img = cv2.imread(str(path))
    if img is None:
        # OpenCV не читает некоторые файлы (например, webp без кодека)
        try:
            with Image.open(path) as pil:
                arr = np.array(pil.convert("RGB"))
        except (UnidentifiedImageError, OSError) as e:
            raise IngestError(f"Cannot read image {path.name}: {e}") from e
        img = arr[:, :, ::-1].copy()
    if img.size == 0:
        raise IngestError(f"Empty image: {path.name}")
    return img
