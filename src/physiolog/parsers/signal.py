"""
Signal Log Parser

Parses _ECG.log, _RESP.log, _PULS.log and _EXT.log files into dense
per-tick arrays aligned to the scan time base.

Data rows: `timestamp channel value trigger`. Each row writes `value`
across `SampleTime` consecutive ticks starting at its timestamp; later
rows overwrite earlier ones where their ranges overlap.
"""

import logging

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from physiolog.constants import (
    ACQUISITION_HEADER_KEYS,
    ECG_CHANNELS,
    EXPECTED_LOG_VERSION,
    EXT_CHANNELS,
    KEY_SAMPLE_TIME,
    PULS_CHANNELS,
    RESP_CHANNELS,
    SIGNAL_HEADER_KEYS,
)
from physiolog.parsers.base import (
    DataRow,
    InvalidChannelError,
    PhysioLogParser,
)
from physiolog.parsers.types import LogDataType, SignalHeader, TimeBase

logger = logging.getLogger(__name__)

UINT16_MAX = np.iinfo(np.uint16).max
UINT32_MAX = np.iinfo(np.uint32).max

SIGNAL_CHANNELS: dict[LogDataType, tuple[str, ...]] = {
    LogDataType.ECG: ECG_CHANNELS,
    LogDataType.RESP: RESP_CHANNELS,
    LogDataType.PULS: PULS_CHANNELS,
    LogDataType.EXT: EXT_CHANNELS,
}


@dataclass
class SignalLog:
    """
    Decoded signal log file.

    `samples` has one row per tick of the scan (padded) and one column per
    channel of this log kind, in `channels` order.
    """

    path: Path
    header: SignalHeader
    channels: tuple[str, ...]
    samples: np.ndarray

    @property
    def uuid(self) -> str:
        return self.header.uuid

    def channel(self, name: str) -> np.ndarray:
        """Per-tick values of one channel."""
        try:
            index = self.channels.index(name)
        except ValueError:
            raise KeyError(
                f"{self.header.data_type.value} log has no channel {name!r}"
            ) from None
        return self.samples[:, index]

    def active_channels(self) -> list[str]:
        """Channels with at least one nonzero sample."""
        return [
            name
            for index, name in enumerate(self.channels)
            if np.any(self.samples[:, index])
        ]


class SignalLogParser(PhysioLogParser):
    """Parser for ECG, RESP, PULS and EXT log files."""

    required_keys = SIGNAL_HEADER_KEYS
    foreign_keys = ACQUISITION_HEADER_KEYS
    sizing_keys = (KEY_SAMPLE_TIME,)

    def __init__(
        self,
        data_type: LogDataType | str,
        expected_version: str = EXPECTED_LOG_VERSION,
    ):
        data_type = LogDataType(data_type)
        if data_type not in SIGNAL_CHANNELS:
            raise ValueError(f"{data_type.value} is not a signal log type")
        super().__init__(expected_version)
        self.data_type = data_type
        self.channels = SIGNAL_CHANNELS[data_type]

    def _make_header(
        self, common: dict[str, Any], values: dict[str, str]
    ) -> SignalHeader:
        return SignalHeader(**common, sample_time=int(values[KEY_SAMPLE_TIME]))

    def resolve_channel(self, path: Path, row: DataRow, label: str) -> int:
        """Column index for a channel label."""
        # Single-channel logs don't distinguish labels
        if len(self.channels) == 1:
            return 0
        try:
            return self.channels.index(label)
        except ValueError:
            raise InvalidChannelError(
                f"invalid {self.data_type.value} channel ID [{label}]",
                path,
                row.line_number,
            ) from None

    def _decode(
        self,
        path: Path,
        header: SignalHeader,
        data_rows: list[DataRow],
        time_base: TimeBase | None,
    ) -> SignalLog:
        if time_base is None:
            raise ValueError(
                f"{self.data_type.value} logs need the time base of the Info log"
            )

        n_samples = time_base.expected_samples
        samples = np.zeros((n_samples, len(self.channels)), dtype=np.uint16)
        sample_time = header.sample_time
        clamped = 0

        for row in data_rows:
            fields = self._split_row(path, row)
            timestamp = self._parse_uint(path, row, fields[0], "timestamp", UINT32_MAX)
            index = self.resolve_channel(path, row, fields[1])
            value = self._parse_uint(path, row, fields[2], "value", UINT16_MAX)
            # fields[3] is the trigger flag, not used

            start = max(timestamp - time_base.first_time, 0)
            stop = start + sample_time
            if stop > n_samples:
                clamped += 1
            samples[start:stop, index] = value

        if clamped:
            logger.warning(
                f"{path}: {clamped} sample(s) ran past the end of the scan "
                f"({n_samples} ticks) and were truncated"
            )

        return SignalLog(
            path=path, header=header, channels=self.channels, samples=samples
        )
