"""Line-oriented file helpers used by the flat-file repositories."""

import logging
import os
from typing import Callable, Iterable, TypeVar

from src.common.exceptions.custom_exceptions import PersistenceError, RecordFormatError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FIELD_DELIMITER = "|"
LIST_DELIMITER = ","


def split_record(line: str, record_kind: str, min_fields: int) -> list[str]:
    """Splits a '|' delimited line, rejecting lines with too few fields."""
    parts = line.rstrip("\r\n").split(FIELD_DELIMITER)
    if len(parts) < min_fields:
        raise RecordFormatError(record_kind, line, f"expected at least {min_fields} fields, got {len(parts)}")
    return parts


def format_id_list(ids: Iterable[int]) -> str:
    return LIST_DELIMITER.join(str(i) for i in ids)


def parse_id_list(field: str) -> tuple[int, ...]:
    """Parses '1,2,3' into (1, 2, 3). Empty entries are ignored, order and duplicates kept."""
    return tuple(int(item) for item in field.split(LIST_DELIMITER) if item.strip())


def write_records(path: str, records: Iterable[str]) -> int:
    """Writes one record per line, replacing the file. Returns the number of lines written."""
    directory = os.path.dirname(path)
    count = 0
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for record in records:
                f.write(record + "\n")
                count += 1
    except OSError as e:
        raise PersistenceError(f"Could not write {path}", original_exception=e)
    return count


def read_records(path: str, parser: Callable[[str], T], record_kind: str) -> list[T]:
    """
    Parses every non-blank line of a file.

    A missing file reads as empty. Lines the parser rejects are skipped with a warning.
    """
    if not os.path.exists(path):
        logger.debug(f"No {record_kind} file at {path}")
        return []

    parsed: list[T] = []
    try:
        # Decoded per line; an undecodable line is skipped like a malformed one
        with open(path, "rb") as f:
            for line_number, raw_line in enumerate(f, 1):
                try:
                    line = raw_line.decode("utf-8")
                except UnicodeDecodeError as e:
                    logger.warning(f"Skipping {record_kind} record at {path}:{line_number}: not valid UTF-8 ({e})")
                    continue
                if not line.strip():
                    continue
                try:
                    parsed.append(parser(line))
                except RecordFormatError as e:
                    logger.warning(f"Skipping {record_kind} record at {path}:{line_number}: {e}")
    except OSError as e:
        raise PersistenceError(f"Could not read {path}", original_exception=e)
    return parsed
