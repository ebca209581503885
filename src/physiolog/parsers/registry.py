"""
Parser Registry

Maps each LogDataType to the parser that decodes it. The set of log kinds
is closed: one Info parser and four signal parsers.
"""

import logging

from collections.abc import Callable
from pathlib import Path

from physiolog.constants import EXPECTED_LOG_VERSION
from physiolog.parsers.acquisition_info import (
    AcquisitionInfoLog,
    AcquisitionInfoParser,
)
from physiolog.parsers.base import PhysioLogParser
from physiolog.parsers.signal import SignalLog, SignalLogParser
from physiolog.parsers.types import LogDataType, TimeBase

logger = logging.getLogger(__name__)

ParserFactory = Callable[[str], PhysioLogParser]


class ParserRegistry:
    """
    Registry of parser factories keyed by LogDataType.

    Usage:
        parser = parser_registry.get_parser(LogDataType.ECG, "EJA_1")
        ecg = parser.parse(path, time_base)
    """

    def __init__(self) -> None:
        self._factories: dict[LogDataType, ParserFactory] = {}

    def register(self, data_type: LogDataType, factory: ParserFactory) -> None:
        """
        Register the parser factory for a log kind.

        Raises:
            ValueError: If the kind already has a parser
        """
        if data_type in self._factories:
            raise ValueError(f"Parser for {data_type.value} already registered")
        self._factories[data_type] = factory
        logger.debug(f"Registered parser for {data_type.value}")

    def get_parser(
        self,
        data_type: LogDataType | str,
        expected_version: str = EXPECTED_LOG_VERSION,
    ) -> PhysioLogParser:
        """
        Create the parser for a log kind.

        Raises:
            KeyError: If no parser handles the kind
        """
        data_type = LogDataType(data_type)
        try:
            factory = self._factories[data_type]
        except KeyError:
            raise KeyError(f"No parser registered for {data_type.value}") from None
        return factory(expected_version)

    def list_data_types(self) -> list[LogDataType]:
        return list(self._factories)


def _signal_factory(data_type: LogDataType) -> ParserFactory:
    def factory(expected_version: str) -> PhysioLogParser:
        return SignalLogParser(data_type, expected_version)

    return factory


parser_registry = ParserRegistry()
parser_registry.register(LogDataType.ACQUISITION_INFO, AcquisitionInfoParser)
for _data_type in LogDataType:
    if _data_type.is_signal:
        parser_registry.register(_data_type, _signal_factory(_data_type))


def parse_log_file(
    path: Path | str,
    data_type: LogDataType | str,
    expected_version: str = EXPECTED_LOG_VERSION,
    time_base: TimeBase | None = None,
) -> AcquisitionInfoLog | SignalLog:
    """
    Decode one log file of the given kind.

    Args:
        path: Log file
        data_type: Kind the file must declare in its LogDataType header
        expected_version: Accepted LogVersion
        time_base: Scan time base; required for signal logs

    Returns:
        AcquisitionInfoLog for ACQUISITION_INFO, SignalLog otherwise

    Raises:
        PhysioLogError: If reading or validation fails
    """
    parser = parser_registry.get_parser(data_type, expected_version)
    result: AcquisitionInfoLog | SignalLog = parser.parse(path, time_base)
    return result
