# -*- coding: utf-8 -*-
"""Тесты предобработки"""
import cv2
import numpy as np
import pytest

from passport_reader.preprocess import deskew_simple, preprocess_pipeline, skew_angle


def _text_like_image():
    img = np.full((200, 400, 3), 255, dtype=np.uint8)
    for y in range(40, 160, 30):
        cv2.rectangle(img, (30, y), (370, y + 10), (0, 0, 0), -1)
    return img


def test_pipeline_returns_gray_and_info():
    out, info = preprocess_pipeline(_text_like_image())
    assert out.ndim == 2
    assert info["deskew"] is True
    assert info["enhanced"] is True
    assert "time_ms" in info


def test_pipeline_steps_optional():
    img = _text_like_image()
    out, info = preprocess_pipeline(img, do_deskew=False, do_enhance=False)
    assert out.shape == img.shape
    assert info == {"time_ms": info["time_ms"]}


def test_deskew_blank_image_unchanged():
    blank = np.full((50, 50, 3), 255, dtype=np.uint8)
    assert deskew_simple(blank) is blank


def _rotated(img, degrees):
    h, w = img.shape[:2]
    M = cv2.getRotationMatrix2D((w / 2, h / 2), degrees, 1.0)
    return cv2.warpAffine(img, M, (w, h), borderMode=cv2.BORDER_REPLICATE)


def _slope(img):
    """Наклон тёмных пикселей по МНК: y = k·x + b"""
    gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    ys, xs = np.where(gray < 128)
    return np.polyfit(xs, ys, 1)[0]


def test_skew_angle_sign():
    assert skew_angle(_rotated(_text_like_image(), 5)) == pytest.approx(-5, abs=1)
    assert skew_angle(_rotated(_text_like_image(), -5)) == pytest.approx(5, abs=1)
    assert skew_angle(np.full((50, 50, 3), 255, dtype=np.uint8)) is None


@pytest.mark.parametrize("degrees", [5, -5])
def test_deskew_reduces_skew(degrees):
    skewed = _rotated(_text_like_image(), degrees)
    before = abs(_slope(skewed))
    after = abs(_slope(deskew_simple(skewed)))
    assert before > 0.05
    assert after < before / 4


def test_straight_image_unchanged():
    img = _text_like_image()
    assert deskew_simple(img) is img
