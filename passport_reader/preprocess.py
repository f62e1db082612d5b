# -*- coding: utf-8 -*-
"""
Preprocess — deskew и улучшение контраста перед OCR (опционально)
"""
import time

import cv2
import numpy as np


# Поворот меньше этого не исправляем
MIN_SKEW_DEG = 0.5


def _to_gray(img: np.ndarray) -> np.ndarray:
    if len(img.shape) == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    return img.copy()


def skew_angle(img: np.ndarray) -> float | None:
    """
    Наклон строк текста в градусах (координаты изображения, y вниз).
    Отрицательный — строки поднимаются вправо. None — мало тёмных пикселей.
    """
    thresh = cv2.threshold(cv2.bitwise_not(_to_gray(img)), 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)[1]
    ys, xs = np.where(thresh > 0)
    if len(xs) < 100:
        return None
    points = np.column_stack((xs, ys)).astype(np.float32)
    box = cv2.boxPoints(cv2.minAreaRect(points))
    # угол длинной стороны прямоугольника, не зависит от соглашений minAreaRect
    edges = [box[(k + 1) % 4] - box[k] for k in range(2)]
    dx, dy = max(edges, key=lambda e: float(np.hypot(*e)))
    angle = float(np.degrees(np.arctan2(dy, dx)))
    while angle > 45:
        angle -= 90
    while angle <= -45:
        angle += 90
    return angle


def deskew_simple(img: np.ndarray) -> np.ndarray:
    """Выровнять строки MRZ по горизонтали"""
    angle = skew_angle(img)
    if angle is None or abs(angle) < MIN_SKEW_DEG:
        return img
    h, w = img.shape[:2]
    # getRotationMatrix2D: положительный угол — против часовой стрелки
    M = cv2.getRotationMatrix2D((w / 2, h / 2), angle, 1.0)
    return cv2.warpAffine(img, M, (w, h), flags=cv2.INTER_CUBIC, borderMode=cv2.BORDER_REPLICATE)


def enhance(img: np.ndarray) -> np.ndarray:
    """Denoise + CLAHE; MRZ печатается OCR-B, резкость не трогаем"""
    gray = cv2.fastNlMeansDenoising(_to_gray(img), None, 5, 7, 21)
    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    return clahe.apply(gray)


def preprocess_pipeline(
    img: np.ndarray,
    do_deskew: bool = True,
    do_enhance: bool = True,
) -> tuple[np.ndarray, dict]:
    """
    Пайплайн предобработки.
    Возвращает (clean_image, preprocess_info).
    """
    info = {}
    t0 = time.perf_counter()
    out = img.copy()

    if do_deskew:
        out = deskew_simple(out)
        info["deskew"] = True

    if do_enhance:
        out = enhance(out)
        info["enhanced"] = True

    info["time_ms"] = round((time.perf_counter() - t0) * 1000, 1)
    return out, info
