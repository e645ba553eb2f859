#!/usr/bin/env python3
"""Classify label text (or an image through the Vision API) from the command line."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from services.errors import ScanError
from services.ingredient_pipeline import classify_label_text, scan_image
from services.ingredient_pipeline.orchestrator import load_references
from services.text_extraction import VisionTextExtractor

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _classify(args) -> dict:
    if args.image:
        image = args.image.read_bytes()
        verdict = asyncio.run(scan_image(image, VisionTextExtractor()))
    else:
        text = args.text.read_text(encoding="utf-8") if args.text else sys.stdin.read()
        verdict = classify_label_text(text, load_references())
    return verdict.to_dict()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", type=Path, help="File with OCR label text (default: stdin)")
    source.add_argument("--image", type=Path, help="Label photo, sent to the Vision API")
    args = parser.parse_args()

    try:
        result = _classify(args)
    except ScanError as e:
        logger.error(f"{e.message} ({e})")
        return 1
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
