# -*- coding: utf-8 -*-
"""Тесты пайплайна на поддельном OCR-движке"""
import asyncio
from datetime import date

import pytest

from passport_reader.errors import DetectionError, EngineError, IngestError, ValidationFailed
from passport_reader.pipeline import process_passport, process_passport_async, process_passport_from_bytes
from passport_reader.schemas import PageSegMode

from conftest import VIZ_TEXT

VALID_ON = date(2010, 1, 1)
EXPIRED_ON = date(2026, 10, 18)


def test_specimen_end_to_end(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text], viz_text=VIZ_TEXT, confidence=88.0)
    result = process_passport(str(passport_image), engine=engine, today=VALID_ON)
    r = result.record
    assert r.surname == "ERIKSSON"
    assert r.given_names == "ANNA MARIA"
    assert r.document_number == "L898902C3"
    assert r.date_of_birth == "12/08/1974"
    assert r.expiry_date == "15/04/2012"
    assert r.gender == "Female"
    assert r.birth_place == "ZENITH"
    assert r.issue_date == "16/04/2007"
    assert r.place_of_issue == ""
    assert result.validation.valid
    assert result.checks.composite_ok
    assert result.confidence == 88.0
    assert result.debug.ocr_engine == "fake"
    assert result.debug.page_seg_mode == 6
    assert engine.started == engine.stopped == 2


def test_expired_specimen_strict(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text], viz_text=VIZ_TEXT)
    with pytest.raises(ValidationFailed) as exc:
        process_passport(str(passport_image), engine=engine, today=EXPIRED_ON)
    outcome = exc.value.outcome
    assert outcome.valid is False
    assert len(outcome.errors) == 1
    assert "expired" in outcome.errors[0]
    assert exc.value.record.surname == "ERIKSSON"


def test_expired_specimen_lenient(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text])
    result = process_passport(str(passport_image), engine=engine, strict=False, today=EXPIRED_ON)
    assert result.validation.valid is False
    assert len(result.validation.errors) == 1
    assert result.record.place_of_issue == ""
    assert not any("issue" in m.lower() for m in result.validation.errors + result.validation.warnings)


def test_detection_failure(make_engine, passport_image):
    engine = make_engine(["no zone here"], confidence=31.0)
    with pytest.raises(DetectionError) as exc:
        process_passport(str(passport_image), engine=engine, today=VALID_ON)
    assert exc.value.confidence == 31.0
    assert "31.0%" in exc.value.message
    # три режима и без второго прохода VIZ
    assert len(engine.calls) == 3


def test_confidence_check_optional(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text], confidence=40.0)
    result = process_passport(str(passport_image), engine=engine, today=VALID_ON)
    assert result.validation.valid
    with pytest.raises(ValidationFailed) as exc:
        process_passport(str(passport_image), engine=engine, check_confidence=True, today=VALID_ON)
    assert "very low" in exc.value.outcome.errors[0]


def test_missing_file(make_engine, tmp_path):
    with pytest.raises(IngestError):
        process_passport(str(tmp_path / "nope.jpg"), engine=make_engine())


def test_unsupported_format(make_engine, tmp_path):
    path = tmp_path / "passport.txt"
    path.write_text("not an image")
    with pytest.raises(IngestError):
        process_passport(str(path), engine=make_engine())


def test_from_bytes_cleans_up(make_engine, passport_image, zone_text, tmp_path):
    work = tmp_path / "work"
    work.mkdir()
    engine = make_engine([zone_text])
    result = process_passport_from_bytes(
        passport_image.read_bytes(), suffix=".png", temp_dir=str(work), engine=engine, today=VALID_ON,
    )
    assert result.record.document_number == "L898902C3"
    assert list(work.iterdir()) == []


def test_async(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text])
    result = asyncio.run(process_passport_async(str(passport_image), engine=engine, today=VALID_ON))
    assert result.record.surname == "ERIKSSON"


def test_result_to_dict(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text])
    d = process_passport(str(passport_image), engine=engine, today=VALID_ON).to_dict()
    assert d["record"]["givenNames"] == "ANNA MARIA"
    assert d["validation"]["valid"] is True


def test_with_preprocess(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text])
    result = process_passport(str(passport_image), engine=engine, do_preprocess=True, today=VALID_ON)
    assert result.debug.preprocess["enhanced"] is True
    assert "preprocess" in result.debug.timings_ms


def test_engine_crash_during_zone_scan(make_engine, passport_image):
    engine = make_engine(["x"], fail_on=PageSegMode.SINGLE_BLOCK)
    with pytest.raises(EngineError) as exc:
        process_passport(str(passport_image), engine=engine)
    assert "RuntimeError" in exc.value.message
    assert isinstance(exc.value.__cause__, RuntimeError)
    assert engine.started == engine.stopped == 1


def test_engine_crash_during_viz_scan(make_engine, passport_image, zone_text):
    engine = make_engine([zone_text], confidence=81.0, fail_on=PageSegMode.AUTO)
    with pytest.raises(EngineError) as exc:
        process_passport(str(passport_image), engine=engine, today=VALID_ON)
    assert exc.value.confidence == 81.0
    assert engine.started == engine.stopped


def test_preprocess_failure_wrapped(make_engine, passport_image, monkeypatch):
    import passport_reader.pipeline as pipeline

    def broken(img):
        raise ValueError("bad image")

    monkeypatch.setattr(pipeline, "preprocess_pipeline", broken)
    with pytest.raises(EngineError, match="Preprocess failed"):
        process_passport(str(passport_image), engine=make_engine(["x"]), do_preprocess=True)
