"""Log file parsers package."""

from physiolog.parsers.acquisition_info import (
    AcquisitionInfoLog,
    AcquisitionInfoParser,
)
from physiolog.parsers.base import (
    ConsistencyViolationError,
    DataTypeMismatchError,
    DataViolationError,
    DuplicateRecordError,
    FormatVersionMismatchError,
    FormatViolationError,
    InvalidChannelError,
    InvalidTimeRangeError,
    MalformedHeaderError,
    MalformedRecordError,
    MissingHeaderError,
    MissingInputError,
    PhysioLogError,
    PhysioLogParser,
    RecordIndexError,
    SchemaFieldMisplacedError,
    UuidMismatchError,
    UuidMissingError,
)
from physiolog.parsers.registry import parse_log_file, parser_registry
from physiolog.parsers.signal import SignalLog, SignalLogParser
from physiolog.parsers.types import (
    AcquisitionHeader,
    LogDataType,
    LogHeader,
    SignalHeader,
    TimeBase,
)

__all__ = [
    "AcquisitionHeader",
    "AcquisitionInfoLog",
    "AcquisitionInfoParser",
    "ConsistencyViolationError",
    "DataTypeMismatchError",
    "DataViolationError",
    "DuplicateRecordError",
    "FormatVersionMismatchError",
    "FormatViolationError",
    "InvalidChannelError",
    "InvalidTimeRangeError",
    "LogDataType",
    "LogHeader",
    "MalformedHeaderError",
    "MalformedRecordError",
    "MissingHeaderError",
    "MissingInputError",
    "PhysioLogError",
    "PhysioLogParser",
    "RecordIndexError",
    "SchemaFieldMisplacedError",
    "SignalHeader",
    "SignalLog",
    "SignalLogParser",
    "TimeBase",
    "UuidMismatchError",
    "UuidMissingError",
    "parse_log_file",
    "parser_registry",
]
