"""
Persistence Module

Reads and writes JSON and YAML data files inside a data directory.
A missing file is not an error; it loads as None so callers can fall back
to an empty collection.
"""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from domain.workday_calendar import parse_date_key
from infrastructure.logger import get_logger

logger = get_logger("Persistence")


# ==============================================================================
# Custom Exceptions
# ==============================================================================
class DataError(Exception):
    """Base exception for data loading errors."""
    pass


class DataFormatError(DataError):
    """Raised when a data file or a value inside it cannot be parsed."""

    def __init__(self, path: Path, detail: str):
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"{self.path.name}: {detail}")


class PeriodNotFoundError(DataError):
    """Raised when no period matches a key or date."""
    pass


# ==============================================================================
# JSON / YAML helpers
# ==============================================================================
def load_json(path: Path) -> Optional[Any]:
    """
    Load a JSON document.

    Args:
        path: File to read

    Returns:
        Parsed document, or None if the file does not exist

    Raises:
        DataFormatError: If the file is not valid JSON
    """
    if not path.exists():
        logger.debug(f"Data file not found, using empty data: {path}")
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DataFormatError(path, f"invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise DataFormatError(path, f"not valid UTF-8: {e}") from e


def save_json(path: Path, data: Any) -> None:
    """Write a JSON document, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.debug(f"Wrote {path}")


def load_yaml(path: Path) -> Optional[Any]:
    """
    Load a YAML document.

    Returns:
        Parsed document, or None if the file does not exist

    Raises:
        DataFormatError: If the file is not valid YAML
    """
    if not path.exists():
        logger.debug(f"Data file not found, using empty data: {path}")
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataFormatError(path, f"invalid YAML: {e}") from e
    except UnicodeDecodeError as e:
        raise DataFormatError(path, f"not valid UTF-8: {e}") from e


def save_yaml(path: Path, data: Any) -> None:
    """Write a YAML document, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
    logger.debug(f"Wrote {path}")


def ensure_mapping(path: Path, document: Optional[Any]) -> dict:
    """Return the document as a dict; None becomes an empty dict."""
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise DataFormatError(path, "expected a mapping at the top level")
    return document


def ensure_list(path: Path, value: Optional[Any], what: str) -> list:
    """Return the value as a list; None becomes an empty list."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise DataFormatError(path, f"expected a list for {what}, got {type(value).__name__}")
    return value


def coerce_date(path: Path, value: Any, what: str) -> date:
    """
    Convert a stored date value to a date.

    YAML loads unquoted YYYY-MM-DD values as dates, JSON keeps them as
    strings; both forms are accepted.

    Raises:
        DataFormatError: If the value is not a valid YYYY-MM-DD date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_date_key(str(value))
    except ValueError as e:
        raise DataFormatError(path, f"cannot parse {what} {value!r}") from e
