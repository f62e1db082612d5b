#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Точка входа: пакетное распознавание паспортов.
Каждое изображение → OCR MRZ + VIZ → проверка → applicant-NN.json.
Использование: python main.py data/passports -o data/processed
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from passport_reader.config import LOG_LEVEL
from passport_reader.errors import PassportReaderError
from passport_reader.ingest import is_image
from passport_reader.ocr_engines import get_engine
from passport_reader.parse import split_given_names
from passport_reader.pipeline import process_passport

logger = logging.getLogger("passport_reader.cli")


def setup_logging(level_name: str = LOG_LEVEL):
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="passport-reader",
        description="Extract identity data from passport bio page images (MRZ + visual zone).",
    )
    p.add_argument("inputs", nargs="+", type=Path, help="Image files or directories with images.")
    p.add_argument("-o", "--out", type=Path, default=Path("processed"), help="Output directory for JSON files.")
    p.add_argument("--engine", default=None, help="OCR engine: tesseract|easyocr (default: OCR_ENGINE).")
    p.add_argument("--preprocess", action="store_true", default=None, help="Deskew and enhance before OCR.")
    p.add_argument("--lenient", action="store_true", help="Write records that failed validation instead of skipping them.")
    p.add_argument("--log-level", default=LOG_LEVEL, help="Logging level (default: LOG_LEVEL or INFO).")
    return p


def collect_images(inputs: list[Path]) -> list[Path]:
    """Файлы из аргументов и изображения из папок, в отсортированном порядке"""
    images = []
    for item in inputs:
        if item.is_dir():
            images.extend(sorted(p for p in item.iterdir() if p.is_file() and is_image(str(p))))
        else:
            images.append(item)
    return images


def applicant_label(index: int, total: int) -> str:
    digits = max(2, len(str(total)))
    return f"applicant-{str(index + 1).zfill(digits)}"


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level)

    images = collect_images(args.inputs)
    if not images:
        logger.error("No image files found in: %s", ", ".join(str(p) for p in args.inputs))
        return 1
    args.out.mkdir(parents=True, exist_ok=True)

    engine = get_engine(args.engine)
    logger.info("Found %d passport image(s), engine %s", len(images), engine.name)

    passed = failed = 0
    for i, image in enumerate(images):
        label = applicant_label(i, len(images))
        prefix = f"[{label} {image.name}]"
        try:
            result = process_passport(
                str(image), engine=engine, do_preprocess=args.preprocess, strict=not args.lenient,
            )
        except PassportReaderError as e:
            logger.error("%s OCR failed: %s", prefix, e.message)
            failed += 1
            continue

        data = result.to_dict()
        first, middle = split_given_names(result.record.given_names)
        data["record"]["firstName"] = first
        data["record"]["middleName"] = middle
        data["source"] = str(image)
        out_path = args.out / f"{label}.json"
        out_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")

        logger.info("%s stored -> %s", prefix, out_path)
        logger.debug("%s first: %s, middle: %s, last: %s", prefix, first, middle, result.record.surname)
        passed += 1

    print("-" * 60)
    print(f"Done: {passed} succeeded, {failed} failed.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
