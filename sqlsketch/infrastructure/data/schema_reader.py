from __future__ import annotations

import io
import json
import logging
import os
from typing import Any, Dict, List

import pandas as pd

from ...domain.exceptions import UnsupportedFileError

logger = logging.getLogger("sqlsketch.schema")

SUPPORTED_SUFFIXES = (".csv", ".json")


def file_suffix(filename: str) -> str:
    suffix = os.path.splitext(filename or "")[1].lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileError("Only CSV/JSON files are supported.")
    return suffix


def decode_upload(content: bytes) -> str:
    return content.decode("utf-8-sig", errors="replace")


def csv_columns(text: str) -> List[str]:
    header = text.split("\n", 1)[0]
    if not header.strip():
        return []
    return [c.strip() for c in header.split(",")]


def json_columns(text: str) -> List[str]:
    try:
        data = json.loads(text)
    except ValueError:
        return []
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return list(data[0].keys())
    return []


def read_columns(filename: str, text: str) -> List[str]:
    if file_suffix(filename) == ".csv":
        return csv_columns(text)
    return json_columns(text)


def read_preview(filename: str, text: str, max_rows: int) -> List[Dict[str, Any]]:
    """First rows of the upload as records; empty when pandas cannot read it as a table."""
    try:
        if file_suffix(filename) == ".csv":
            df = pd.read_csv(io.StringIO(text), nrows=max_rows)
        else:
            df = pd.read_json(io.StringIO(text), orient="records")
    except (ValueError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.debug("No preview for %s: %s", filename, e)
        return []
    return json.loads(df.head(max_rows).to_json(orient="records", date_format="iso"))
