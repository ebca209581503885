"""
Abstract Log Parser Interface

This module defines the base class shared by the Info and the signal log
parsers, the line classification they both rely on, and the exception
taxonomy raised while reading a measurement.

Every log file is read in two phases:
1. Collect all header assignments and data rows from the file
2. Validate the header, then allocate the output array and fill it

Any error aborts the read; there is no partial result.
"""

import logging

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from pydantic import ValidationError

from physiolog.constants import (
    COMMON_HEADER_KEYS,
    EXPECTED_LOG_VERSION,
    KEY_LOG_DATA_TYPE,
    KEY_LOG_VERSION,
    KEY_UUID,
)
from physiolog.parsers.types import LogDataType, LogHeader, TimeBase

logger = logging.getLogger(__name__)

DATA_ROW_FIELDS = 4


# ============================================================================
# Exceptions
# ============================================================================


class PhysioLogError(Exception):
    """Base exception for physio log errors."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        line_number: int | None = None,
    ):
        self.message = message
        self.path = Path(path) if path is not None else None
        self.line_number = line_number

        location = ""
        if self.path is not None:
            location = f"{self.path}: "
            if line_number is not None:
                location = f"{self.path}:{line_number}: "
        super().__init__(f"{location}{message}")


class MissingInputError(PhysioLogError, FileNotFoundError):
    """A required log file does not exist."""


class FormatViolationError(PhysioLogError):
    """The file does not follow the expected log format."""


class FormatVersionMismatchError(FormatViolationError):
    pass


class DataTypeMismatchError(FormatViolationError):
    pass


class SchemaFieldMisplacedError(FormatViolationError):
    """A header key belonging to another kind of log file."""


class MissingHeaderError(FormatViolationError):
    pass


class UuidMissingError(MissingHeaderError):
    pass


class MalformedHeaderError(FormatViolationError):
    pass


class MalformedRecordError(FormatViolationError):
    pass


class ConsistencyViolationError(PhysioLogError):
    """The files of one measurement disagree with each other or themselves."""


class UuidMismatchError(ConsistencyViolationError):
    pass


class DuplicateRecordError(ConsistencyViolationError):
    pass


class InvalidTimeRangeError(ConsistencyViolationError):
    pass


class DataViolationError(PhysioLogError):
    """A data row references something the file does not define."""


class InvalidChannelError(DataViolationError):
    pass


class RecordIndexError(DataViolationError):
    pass


# ============================================================================
# Line Classification
# ============================================================================


@dataclass(frozen=True)
class HeaderLine:
    """A `key = value` assignment."""

    line_number: int
    key: str
    value: str


@dataclass(frozen=True)
class DataRow:
    """A whitespace separated row whose first field starts with a digit."""

    line_number: int
    fields: tuple[str, ...]


def strip_comment(line: str) -> str:
    """Remove surrounding whitespace and a trailing `#` comment."""
    line = line.strip()
    hash_index = line.find("#")
    if hash_index > 0:
        line = line[:hash_index].strip()
    return line


def classify_line(raw: str, line_number: int) -> HeaderLine | DataRow | None:
    """
    Classify one physical line of a log file.

    Returns:
        HeaderLine for assignments, DataRow for numeric rows, None for
        blank lines and textual column-label rows
    """
    line = strip_comment(raw)
    if not line:
        return None

    if "=" in line:
        key, value = line.split("=", 1)
        return HeaderLine(line_number, key.strip(), value.strip())

    fields = tuple(line.split())
    if not fields[0][0].isdigit():
        return None
    return DataRow(line_number, fields)


def read_log_lines(path: Path) -> tuple[list[HeaderLine], list[DataRow]]:
    """
    Read a log file and split it into header assignments and data rows.

    Raises:
        MissingInputError: If the file doesn't exist
    """
    if not path.is_file():
        raise MissingInputError("log file not found", path)

    header_lines: list[HeaderLine] = []
    data_rows: list[DataRow] = []

    with open(path, encoding="utf-8", errors="replace") as f:
        for line_number, raw in enumerate(f, start=1):
            entry = classify_line(raw, line_number)
            if isinstance(entry, HeaderLine):
                header_lines.append(entry)
            elif isinstance(entry, DataRow):
                data_rows.append(entry)

    return header_lines, data_rows


# ============================================================================
# Parser Base Class
# ============================================================================


class PhysioLogParser(ABC):
    """
    Abstract base class for the log file parsers.

    Subclasses declare which header keys they require and which belong to
    the other kind of file, build their typed header, and turn the data
    rows into their result.
    """

    data_type: LogDataType
    required_keys: ClassVar[tuple[str, ...]] = ()
    foreign_keys: ClassVar[tuple[str, ...]] = ()
    # Keys that size the output array and must precede every data row
    sizing_keys: ClassVar[tuple[str, ...]] = ()

    def __init__(self, expected_version: str = EXPECTED_LOG_VERSION):
        self.expected_version = expected_version

    def parse(self, path: Path | str, time_base: TimeBase | None = None) -> Any:
        """
        Read and decode one log file.

        Args:
            path: Log file to read
            time_base: Scan time base, required by signal parsers

        Raises:
            PhysioLogError: If the file is missing or fails validation
        """
        path = Path(path)
        logger.info(f"Reading {self.data_type.value} file {path}")

        header_lines, data_rows = read_log_lines(path)
        values = self._collect_header(path, header_lines, data_rows)
        header = self._build_header(path, values)
        return self._decode(path, header, data_rows, time_base)

    @abstractmethod
    def _make_header(self, common: dict[str, Any], values: dict[str, str]) -> Any:
        """Create the typed header from validated raw header values."""

    @abstractmethod
    def _decode(
        self,
        path: Path,
        header: Any,
        data_rows: list[DataRow],
        time_base: TimeBase | None,
    ) -> Any:
        """Turn the data rows into this parser's result."""

    def _collect_header(
        self,
        path: Path,
        header_lines: list[HeaderLine],
        data_rows: list[DataRow],
    ) -> dict[str, str]:
        values: dict[str, str] = {}
        key_lines: dict[str, list[int]] = {}

        for entry in header_lines:
            if entry.key == KEY_LOG_VERSION and entry.value != self.expected_version:
                raise FormatVersionMismatchError(
                    f"file format [{entry.value}] not supported "
                    f"(expected [{self.expected_version}])",
                    path,
                    entry.line_number,
                )
            if entry.key == KEY_LOG_DATA_TYPE and entry.value != self.data_type.value:
                raise DataTypeMismatchError(
                    f"expected [{self.data_type.value}] data, found [{entry.value}]; "
                    "check filenames",
                    path,
                    entry.line_number,
                )
            if entry.key in self.foreign_keys:
                raise SchemaFieldMisplacedError(
                    f"invalid [{entry.key}] parameter in "
                    f"{self.data_type.value} log",
                    path,
                    entry.line_number,
                )
            values[entry.key] = entry.value
            key_lines.setdefault(entry.key, []).append(entry.line_number)

        if KEY_UUID not in values:
            raise UuidMissingError(f"no [{KEY_UUID}] in header", path)
        for key in COMMON_HEADER_KEYS + self.required_keys:
            if key not in values:
                raise MissingHeaderError(f"required header [{key}] missing", path)

        if data_rows:
            first_row = data_rows[0].line_number
            for key in self.sizing_keys:
                first_seen, last_seen = key_lines[key][0], key_lines[key][-1]
                if first_seen > first_row:
                    raise MissingHeaderError(
                        f"data row at line {first_row} precedes "
                        f"[{key}] at line {first_seen}",
                        path,
                        first_row,
                    )
                if last_seen > first_row:
                    raise MalformedHeaderError(
                        f"[{key}] redefined at line {last_seen} "
                        f"after data row at line {first_row}",
                        path,
                        last_seen,
                    )

        return values

    def _build_header(self, path: Path, values: dict[str, str]) -> Any:
        known = set(COMMON_HEADER_KEYS + self.required_keys)
        common = {
            "log_version": values[KEY_LOG_VERSION],
            "data_type": self.data_type,
            "uuid": values[KEY_UUID],
            "extra": {k: v for k, v in values.items() if k not in known},
        }
        for key in self.required_keys:
            try:
                int(values[key])
            except ValueError:
                raise MalformedHeaderError(
                    f"[{key}] must be an integer, got [{values[key]}]", path
                ) from None

        try:
            return self._make_header(common, values)
        except ValidationError as e:
            raise MalformedHeaderError(f"invalid header: {e}", path) from e

    def _split_row(self, path: Path, row: DataRow) -> tuple[str, ...]:
        if len(row.fields) != DATA_ROW_FIELDS:
            raise MalformedRecordError(
                f"expected {DATA_ROW_FIELDS} columns, found {len(row.fields)}",
                path,
                row.line_number,
            )
        return row.fields

    @staticmethod
    def _parse_uint(
        path: Path, row: DataRow, text: str, name: str, max_value: int
    ) -> int:
        try:
            value = int(text)
        except ValueError:
            raise MalformedRecordError(
                f"{name} [{text}] is not an integer", path, row.line_number
            ) from None
        if not 0 <= value <= max_value:
            raise MalformedRecordError(
                f"{name} {value} outside 0..{max_value}", path, row.line_number
            )
        return value

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} type={self.data_type.value} "
            f"version={self.expected_version}>"
        )
