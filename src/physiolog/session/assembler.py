"""
Session Assembler

Reads the five log files of one measurement, checks that they belong
together, and merges them into a SessionResult.

Read order:
1. _Info.log - supplies UUID, slice timing and the scan time range
2. _ECG.log, _RESP.log, _PULS.log, _EXT.log - aligned to that range
"""

import logging

from pathlib import Path

import numpy as np

from physiolog.constants import (
    EDGE_START,
    EDGE_STOP,
    EXPECTED_LOG_VERSION,
    TICK_DURATION_MS,
)
from physiolog.parsers.acquisition_info import AcquisitionInfoLog
from physiolog.parsers.base import (
    InvalidTimeRangeError,
    MissingInputError,
    UuidMismatchError,
)
from physiolog.parsers.discovery import session_files
from physiolog.parsers.registry import parse_log_file
from physiolog.parsers.signal import SignalLog
from physiolog.parsers.types import LogDataType
from physiolog.session.result import SessionResult

logger = logging.getLogger(__name__)

SIGNAL_READ_ORDER = (
    LogDataType.ECG,
    LogDataType.RESP,
    LogDataType.PULS,
    LogDataType.EXT,
)


def build_acquisition_array(timing_map: np.ndarray, n_samples: int) -> np.ndarray:
    """
    Mark every tick covered by a slice acquisition.

    Args:
        timing_map: (2, volumes, slices) relative start/stop ticks
        n_samples: Length of the output array

    Returns:
        uint16 array, 1 for ticks within [start, stop] of any slice

    Cells with no row in the Info log hold (0, 0) and so mark tick 0.
    """
    starts = timing_map[EDGE_START].ravel().astype(np.int64)
    stops = timing_map[EDGE_STOP].ravel().astype(np.int64)
    keep = stops >= starts
    starts = np.minimum(starts[keep], n_samples)
    stops = np.minimum(stops[keep] + 1, n_samples)

    # Coverage count via a difference array; inclusive [start, stop]
    delta = np.zeros(n_samples + 1, dtype=np.int64)
    np.add.at(delta, starts, 1)
    np.add.at(delta, stops, -1)
    coverage = np.cumsum(delta[:-1])

    return (coverage > 0).astype(np.uint16)


class SessionAssembler:
    """Reads and merges the log files of one measurement."""

    def __init__(self, expected_version: str = EXPECTED_LOG_VERSION):
        """
        Initialize assembler.

        Args:
            expected_version: LogVersion every file must declare
        """
        self.expected_version = expected_version

    def assemble(self, base: Path | str) -> SessionResult:
        """
        Read all five logs sharing `base` and build the session result.

        Args:
            base: Path prefix, e.g. `Physio_20150101_120000_<uuid>`

        Raises:
            MissingInputError: If any of the five files is absent
            PhysioLogError: If any file fails to parse or the files disagree
        """
        files = session_files(base)
        missing = files.missing
        if missing:
            raise MissingInputError(f"{missing[0].name} not found", missing[0])

        info = self._read_info(files.paths[LogDataType.ACQUISITION_INFO])
        time_base = info.time_base

        signals: list[SignalLog] = []
        for data_type in SIGNAL_READ_ORDER:
            path = files.paths[data_type]
            signal = parse_log_file(path, data_type, self.expected_version, time_base)
            if signal.uuid != info.uuid:
                raise UuidMismatchError(
                    f"UUID mismatch between Info and {data_type.value} files "
                    f"([{info.uuid}] vs [{signal.uuid}])",
                    path,
                )
            signals.append(signal)

        logger.info("Formatting data...")
        header = info.header
        acq = build_acquisition_array(info.timing_map, header.expected_samples)

        channels: dict[str, np.ndarray] = {}
        for signal in signals:
            for name in signal.active_channels():
                channels[name] = np.ascontiguousarray(signal.channel(name))

        result = SessionResult(
            uuid=info.uuid,
            slice_map=info.timing_map,
            acq=acq,
            num_slices=header.num_slices,
            num_volumes=header.num_volumes,
            first_time=header.first_time,
            last_time=header.last_time,
            channels=channels,
        )
        log_summary(result)
        return result

    def _read_info(self, path: Path) -> AcquisitionInfoLog:
        info = parse_log_file(
            path, LogDataType.ACQUISITION_INFO, self.expected_version
        )
        header = info.header
        if header.last_time <= header.first_time:
            raise InvalidTimeRangeError(
                f"last timestamp {header.last_time} is not greater than "
                f"first timestamp {header.first_time}",
                path,
            )
        return info


def log_summary(result: SessionResult) -> None:
    """Log the scan geometry and duration of a session."""
    logger.info(f"Slices in scan:      {result.num_slices}")
    logger.info(f"Volumes in scan:     {result.num_volumes}")
    logger.info(f"First timestamp:     {result.first_time}")
    logger.info(f"Last timestamp:      {result.last_time}")
    logger.info(f"Total scan duration: {result.actual_samples} ticks")
    logger.info(f"Total scan duration: {result.duration_seconds:.4f} s")
    logger.debug(
        f"Active channels: {', '.join(result.active_channels) or 'none'} "
        f"(tick = {TICK_DURATION_MS} ms)"
    )


def read_physio(
    base: Path | str, expected_version: str = EXPECTED_LOG_VERSION
) -> SessionResult:
    """
    Convenience function to read a measurement.

    Args:
        base: Path prefix shared by the five log files

    Returns:
        SessionResult with only the active channels
    """
    return SessionAssembler(expected_version).assemble(base)
