# -*- coding: utf-8 -*-
"""Тесты сканера: сессии движка и перебор режимов сегментации"""
import numpy as np
import pytest

from passport_reader.ocr_engines.base import engine_session
from passport_reader.scanner import TextScanner, scan_zone
from passport_reader.schemas import DEFAULT_STRATEGIES, ZONE_WHITELIST, PageSegMode, ScanConfig
from passport_reader.viz import scan_visual_fields

IMG = np.full((50, 200, 3), 255, dtype=np.uint8)


def test_strategy_order():
    assert DEFAULT_STRATEGIES == (PageSegMode.SINGLE_BLOCK, PageSegMode.SPARSE_TEXT, PageSegMode.AUTO)


def test_first_strategy_wins(make_engine, zone_text):
    engine = make_engine([zone_text])
    zone = scan_zone(TextScanner(engine), IMG)
    assert zone.found
    assert zone.attempts == 1
    assert zone.page_seg_mode == PageSegMode.SINGLE_BLOCK
    assert len(engine.calls) == 1
    assert engine.calls[0].whitelist == ZONE_WHITELIST


def test_retry_until_found(make_engine, zone_text):
    engine = make_engine(["garbage", "still nothing", zone_text])
    zone = scan_zone(TextScanner(engine), IMG)
    assert zone.found
    assert zone.attempts == 3
    assert [c.page_seg_mode for c in engine.calls] == list(DEFAULT_STRATEGIES)


def test_exhausted_returns_last(make_engine):
    engine = make_engine(["nothing"], confidence=12.5)
    zone = scan_zone(TextScanner(engine), IMG)
    assert not zone.found
    assert zone.lines == []
    assert zone.attempts == 3
    assert zone.text == "nothing"
    assert zone.confidence == 12.5


def test_session_per_call(make_engine, zone_text):
    engine = make_engine(["x", zone_text])
    scanner = TextScanner(engine)
    scan_zone(scanner, IMG)
    assert engine.started == engine.stopped == 2


def test_session_released_on_failure(make_engine):
    engine = make_engine(["x"], fail_on=PageSegMode.SINGLE_BLOCK)
    with pytest.raises(RuntimeError):
        TextScanner(engine).scan(IMG, ScanConfig(whitelist=ZONE_WHITELIST))
    assert engine.started == 1
    assert engine.stopped == 1


def test_engine_session_context(make_engine):
    engine = make_engine()
    with engine_session(engine) as e:
        assert e is engine
        assert engine.started == 1 and engine.stopped == 0
    assert engine.stopped == 1


def test_visual_scan_without_whitelist(make_engine):
    engine = make_engine(viz_text="Place of birth\nZENITH")
    fields = scan_visual_fields(TextScanner(engine, dpi=200), IMG)
    assert fields.birth_place == "ZENITH"
    assert engine.calls[0].whitelist is None
    assert engine.calls[0].page_seg_mode == PageSegMode.AUTO
    assert engine.calls[0].dpi == 200
