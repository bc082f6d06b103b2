#!/usr/bin/env python3
"""Compress a folder of images to JPEG with the backend's compression routine."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from backend.toolpanel.core.settings import Settings
from backend.toolpanel.services.compression import (
    ImageCompressionError,
    compress_image,
    compressed_name,
    summarize,
)

IMAGE_SUFFIXES = {'.jpg', '.jpeg', '.png', '.bmp', '.gif', '.webp', '.tiff'}


def _iter_images(folder: Path) -> List[Path]:
    return sorted(
        path
        for path in folder.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES and not path.name.startswith('compressed-')
    )


def _compress_folder(folder: Path, quality: int, max_side: int) -> Dict[str, Any]:
    rows: List[Dict[str, Any]] = []
    results = []
    for image_path in _iter_images(folder):
        try:
            result = compress_image(image_path.read_bytes(), quality, max_side)
        except ImageCompressionError as exc:
            rows.append({'source': image_path.name, 'error': str(exc)})
            continue
        output_path = image_path.with_name(compressed_name(image_path.name))
        output_path.write_bytes(result.content)
        results.append(result)
        rows.append(
            {
                'source': image_path.name,
                'output': output_path.name,
                'width': result.width,
                'height': result.height,
                'original_size': result.original_size,
                'compressed_size': result.size,
            }
        )
    return {**summarize(results), 'files': rows}


def _run() -> int:
    settings = Settings()
    parser = argparse.ArgumentParser(description='Shrink and recompress images to JPEG.')
    parser.add_argument('folder', help='Folder containing images.')
    parser.add_argument('--quality', type=int, default=settings.default_quality, help='JPEG quality, 1-100.')
    parser.add_argument('--max-side', type=int, default=settings.max_image_side, help='Longest side limit in pixels.')
    args = parser.parse_args()

    folder = Path(args.folder)
    if not folder.is_dir():
        parser.error(f'{folder} is not a directory')
    if not 1 <= args.quality <= 100:
        parser.error('--quality must be between 1 and 100')

    print(json.dumps(_compress_folder(folder, args.quality, args.max_side), indent=2))
    return 0


if __name__ == '__main__':
    raise SystemExit(_run())
