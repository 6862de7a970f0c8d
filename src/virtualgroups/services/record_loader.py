"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/record_loader.py
Loads records (one dict per row) from JSON or CSV files for the CLI.
"""
import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class RecordLoader:
    """
    Reads a file into a list of dict records.
    JSON files must hold an array of objects. CSV files use their header row as
    field names; empty cells become None and numeric cells become int / float.
    """

    SUFFIX_FORMATS = {
        ".json": "json",
        ".csv": "csv",
    }

    @staticmethod
    def detect_format(path: str) -> str:
        suffix = Path(path).suffix.lower()
        fmt = RecordLoader.SUFFIX_FORMATS.get(suffix)
        if fmt is None:
            raise ValueError(f"Cannot detect format of '{path}' (use .json or .csv, or pass a format)")
        return fmt

    @staticmethod
    def load(path: str, fmt: Optional[str] = None) -> List[Dict[str, Any]]:
        """Load records from path. Raises ValueError on malformed content."""
        fmt = fmt or RecordLoader.detect_format(path)
        file_path = Path(path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if fmt == "json":
            records = RecordLoader._load_json(file_path)
        elif fmt == "csv":
            records = RecordLoader._load_csv(file_path)
        else:
            raise ValueError(f"Unsupported format: {fmt}")

        logger.debug(f"Loaded {len(records)} records from {file_path}")
        return records

    @staticmethod
    def _load_json(path: Path) -> List[Dict[str, Any]]:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON array of objects")
        for position, record in enumerate(data):
            if not isinstance(record, dict):
                raise ValueError(f"Record {position} in {path} is not an object")
        return data

    @staticmethod
    def _load_csv(path: Path) -> List[Dict[str, Any]]:
        with path.open(newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            return [
                {name: RecordLoader.coerce_scalar(value) for name, value in row.items()}
                for row in reader
            ]

    @staticmethod
    def coerce_scalar(value: Optional[str]) -> Any:
        """
        Convert a CSV cell to a Python value.
        Examples:
            "" → None
            "2019" → 2019
            "3.5" → 3.5
            "Eng" → "Eng"
        """
        if value is None:
            return None
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return value
