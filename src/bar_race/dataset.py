"""Dataset and metadata loading from JSON or CSV files."""

import csv
import json
from pathlib import Path
from typing import Any, Mapping

from .errors import DataError

Row = dict[str, Any]
MetaRow = Mapping[str, Any]

SUPPORTED_EXTENSIONS = (".json", ".csv")


def load_rows(file_path: str) -> list[Row]:
    """
    Load raw data rows from a JSON or CSV file.

    JSON files must contain a list of objects. CSV files are read with a
    header row; every cell stays a string until the chart normalizes it.

    Args:
        file_path: Path to a ``.json`` or ``.csv`` file

    Returns:
        List of row mappings

    Raises:
        DataError: If the file is missing, malformed or has an unsupported extension
    """
    path = Path(file_path)
    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        supported = ", ".join(SUPPORTED_EXTENSIONS)
        raise DataError(f"Unsupported data file: {file_path}. Supported formats: {supported}")

    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            if ext == ".csv":
                return [dict(row) for row in csv.DictReader(f)]
            payload = json.load(f)
    except FileNotFoundError:
        raise DataError(f"File '{file_path}' not found")
    except json.JSONDecodeError as e:
        raise DataError(f"Invalid JSON in '{file_path}': {e}")

    if not isinstance(payload, list) or not all(isinstance(row, dict) for row in payload):
        raise DataError(f"Expected a list of objects in '{file_path}'")
    return payload


def load_meta(file_path: str | None) -> list[Row]:
    """Load metadata rows (id plus display fields such as ``name``); empty when no path."""
    if not file_path:
        return []
    return load_rows(file_path)
