# -*- coding: utf-8 -*-
"""
Главный пайплайн: Ingest → Preprocess → MRZ scan → Decode → VIZ scan → Validate
"""
import asyncio
import logging
import os
import tempfile
import time
from datetime import date
from pathlib import Path
from typing import Optional

from passport_reader.config import CHECK_OCR_CONFIDENCE, PREPROCESS
from passport_reader.errors import DetectionError, EngineError, ValidationFailed
from passport_reader.ingest import load_image
from passport_reader.ocr_engines import OCREngine
from passport_reader.parse import decode_zone, zone_checks
from passport_reader.preprocess import preprocess_pipeline
from passport_reader.scanner import TextScanner, scan_zone
from passport_reader.schemas import DebugInfo, PassportResult
from passport_reader.validate import validate_record
from passport_reader.viz import scan_visual_fields

logger = logging.getLogger(__name__)


def _ms(t: float) -> float:
    return round((time.perf_counter() - t) * 1000, 1)


def _log_report(result: PassportResult) -> None:
    r = result.record
    logger.debug(
        "Parsed passport: %s | %s | nationality %s | born %s | expires %s | %s",
        r.full_name, r.document_number, r.nationality, r.date_of_birth, r.expiry_date, r.gender,
    )
    for w in result.validation.warnings:
        logger.warning("Validation warning: %s", w)
    for e in result.validation.errors:
        logger.error("Validation error: %s", e)


def process_passport(
    image_path: str,
    engine: Optional[OCREngine] = None,
    do_preprocess: Optional[bool] = None,
    strict: bool = True,
    check_confidence: Optional[bool] = None,
    today: Optional[date] = None,
) -> PassportResult:
    """
    Обработать изображение паспорта.
    IngestError / DetectionError / DecodeError — обработка этого изображения прервана.
    ValidationFailed — только при strict=True; иначе ошибки в result.validation.
    Не логирует полный текст паспорта.
    """
    timings = {}
    t0 = time.perf_counter()
    debug = DebugInfo()

    # Ingest
    img = load_image(image_path)

    # Preprocess
    use_preprocess = PREPROCESS if do_preprocess is None else do_preprocess
    if use_preprocess:
        t1 = time.perf_counter()
        try:
            img, debug.preprocess = preprocess_pipeline(img)
        except Exception as e:
            logger.exception("Preprocess failed (no PII in log)")
            raise EngineError(f"Preprocess failed: {type(e).__name__}: {e}") from e
        timings["preprocess"] = _ms(t1)

    scanner = TextScanner(engine)
    debug.ocr_engine = scanner.engine_name

    # MRZ
    t2 = time.perf_counter()
    try:
        zone = scan_zone(scanner, img)
    except Exception as e:
        logger.exception("MRZ OCR failed (no PII in log)")
        raise EngineError(f"OCR engine failed: {type(e).__name__}: {e}") from e
    timings["mrz_ocr"] = _ms(t2)
    if not zone.found:
        raise DetectionError(
            f"MRZ not detected after {zone.attempts} pass(es). "
            f"OCR confidence: {zone.confidence:.1f}%. "
            "Ensure the passport bio page is fully visible, well-lit, and in focus.",
            confidence=zone.confidence,
        )
    debug.page_seg_mode = int(zone.page_seg_mode)

    # Decode
    t3 = time.perf_counter()
    record = decode_zone(zone.lines, today=today)
    checks = zone_checks(record)
    timings["decode"] = _ms(t3)

    # VIZ
    t4 = time.perf_counter()
    try:
        viz = scan_visual_fields(scanner, img)
    except Exception as e:
        logger.exception("VIZ OCR failed (no PII in log)")
        raise EngineError(
            f"OCR engine failed: {type(e).__name__}: {e}", confidence=zone.confidence,
        ) from e
    record = record.model_copy(update=viz.model_dump())
    timings["viz_ocr"] = _ms(t4)

    # Validate. Confidence с whitelist занижена, по умолчанию не учитываем
    use_conf = CHECK_OCR_CONFIDENCE if check_confidence is None else check_confidence
    outcome = validate_record(record, ocr_confidence=zone.confidence if use_conf else None, today=today)

    timings["total"] = _ms(t0)
    debug.timings_ms = timings
    result = PassportResult(
        record=record, validation=outcome, checks=checks, confidence=zone.confidence, debug=debug,
    )
    _log_report(result)

    if strict and not outcome.valid:
        raise ValidationFailed(outcome, record=record, confidence=zone.confidence)
    return result


async def process_passport_async(image_path: str, **kwargs) -> PassportResult:
    """То же в отдельном потоке, чтобы не блокировать event loop"""
    return await asyncio.to_thread(process_passport, image_path, **kwargs)


def process_passport_from_bytes(
    image_bytes: bytes,
    suffix: str = ".jpg",
    temp_dir: Optional[str] = None,
    **kwargs
) -> PassportResult:
    """Обработать из bytes (например, загрузка через форму)"""
    fd, name = tempfile.mkstemp(prefix="passport_", suffix=suffix, dir=temp_dir)
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(image_bytes)
        return process_passport(str(path), **kwargs)
    finally:
        path.unlink(missing_ok=True)
