# -*- coding: utf-8 -*-
"""Конфигурация из .env"""
import os


def load_dotenv():
    from dotenv import load_dotenv as _load
    _load()


load_dotenv()

# OCR
OCR_ENGINE = os.environ.get("OCR_ENGINE", "tesseract")
TESSERACT_CMD = os.environ.get("TESSERACT_CMD") or None
OCR_LANG = os.environ.get("OCR_LANG", "eng")
OCR_DPI = int(os.environ.get("OCR_DPI", "300"))
OCR_SCALE = float(os.environ.get("OCR_SCALE", "2"))

# Processing
PREPROCESS = os.environ.get("PREPROCESS", "0") == "1"
MAX_FILE_MB = int(os.environ.get("MAX_FILE_MB", "20"))
CHECK_OCR_CONFIDENCE = os.environ.get("CHECK_OCR_CONFIDENCE", "0") == "1"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
