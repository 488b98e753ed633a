#!/usr/bin/env python3
"""
Basic usage example for the PII detector.

This example demonstrates:
- Scanning in-memory text
- Adding a custom pattern
- Scanning files of different formats
- Handling detector errors
"""

import json
import tempfile
from pathlib import Path

from pii_detector import PIIDetector, DetectorConfig, LoggingConfig
from pii_detector.exceptions import PIIDetectorException


def main():
    """Demonstrate basic PII detector usage."""

    config = DetectorConfig(
        custom_patterns=[r"EMP-\d{6}"],  # Internal employee badge numbers
        logging=LoggingConfig(log_level="WARNING", log_format="text")
    )
    detector = PIIDetector(config)

    print("🔍 Scanning text...")
    samples = [
        "contact me at a@b.co",
        "no sensitive data here",
        "badge EMP-004211 checked in",
    ]
    for sample in samples:
        print(f"  {sample!r}: {detector.contains_pii(sample)}")

    print("➕ Adding a custom pattern...")
    detector.add_pattern(r"FOO-\d{3}")
    print(f"  'ref FOO-123': {detector.contains_pii('ref FOO-123')}")

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)

        notes = temp_path / "notes.txt"
        notes.write_text("meeting moved to the afternoon")

        record = temp_path / "record.json"
        record.write_text(json.dumps({"customer": {"phone": "555-123-4567"}}))

        image = temp_path / "photo.bmp"
        image.write_bytes(b"BM")

        print("📄 Scanning files...")
        for path in [notes, record, image, temp_path / "missing.txt"]:
            try:
                result = detector.contains_pii_from_file(str(path))
                print(f"  {path.name}: {result}")
            except PIIDetectorException as e:
                print(f"  {path.name}: ❌ {type(e).__name__}: {e}")

    print(f"📊 {detector}")


if __name__ == "__main__":
    main()
