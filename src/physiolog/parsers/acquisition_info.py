"""
Acquisition Info Log Parser

Parses _Info.log files: the per volume/slice start and stop timestamps of
the scan, plus the scan time range every other log is aligned to.

Data rows: `volume slice start_tick stop_tick` with 0-based indices and
absolute timestamps.
"""

import logging

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from physiolog.constants import (
    ACQUISITION_HEADER_KEYS,
    EDGE_START,
    EDGE_STOP,
    KEY_FIRST_TIME,
    KEY_LAST_TIME,
    KEY_NUM_SLICES,
    KEY_NUM_VOLUMES,
    SIGNAL_HEADER_KEYS,
)
from physiolog.parsers.base import (
    DataRow,
    DuplicateRecordError,
    PhysioLogParser,
    RecordIndexError,
)
from physiolog.parsers.types import AcquisitionHeader, LogDataType, TimeBase

logger = logging.getLogger(__name__)

UINT16_MAX = np.iinfo(np.uint16).max
UINT32_MAX = np.iinfo(np.uint32).max


@dataclass
class AcquisitionInfoLog:
    """
    Decoded _Info.log file.

    `timing_map` has shape (2, volumes, slices): index 0 holds the start
    and index 1 the stop timestamp of every volume/slice, in ticks relative
    to `header.first_time`. Cells never listed in the file stay 0 and are
    False in `recorded`.
    """

    path: Path
    header: AcquisitionHeader
    timing_map: np.ndarray
    recorded: np.ndarray

    @property
    def uuid(self) -> str:
        return self.header.uuid

    @property
    def time_base(self) -> TimeBase:
        return TimeBase.from_header(self.header)

    @property
    def missing_cells(self) -> list[tuple[int, int]]:
        """(volume, slice) pairs with no timing row."""
        volumes, slices = np.nonzero(~self.recorded)
        return list(zip(volumes.tolist(), slices.tolist()))

    def slice_window(self, volume: int, slice_index: int) -> tuple[int, int]:
        """Relative (start, stop) ticks of one volume/slice."""
        return (
            int(self.timing_map[EDGE_START, volume, slice_index]),
            int(self.timing_map[EDGE_STOP, volume, slice_index]),
        )


class AcquisitionInfoParser(PhysioLogParser):
    """Parser for ACQUISITION_INFO log files."""

    data_type = LogDataType.ACQUISITION_INFO
    required_keys = ACQUISITION_HEADER_KEYS
    foreign_keys = SIGNAL_HEADER_KEYS
    sizing_keys = (KEY_NUM_SLICES, KEY_NUM_VOLUMES)

    def _make_header(
        self, common: dict[str, Any], values: dict[str, str]
    ) -> AcquisitionHeader:
        return AcquisitionHeader(
            **common,
            num_slices=int(values[KEY_NUM_SLICES]),
            num_volumes=int(values[KEY_NUM_VOLUMES]),
            first_time=int(values[KEY_FIRST_TIME]),
            last_time=int(values[KEY_LAST_TIME]),
        )

    def _decode(
        self,
        path: Path,
        header: AcquisitionHeader,
        data_rows: list[DataRow],
        time_base: TimeBase | None,
    ) -> AcquisitionInfoLog:
        shape = (header.num_volumes, header.num_slices)
        absolute = np.zeros((2, *shape), dtype=np.int64)
        first_lines: dict[tuple[int, int], int] = {}

        for row in data_rows:
            fields = self._split_row(path, row)
            volume = self._parse_uint(path, row, fields[0], "volume index", UINT16_MAX)
            slice_index = self._parse_uint(
                path, row, fields[1], "slice index", UINT16_MAX
            )
            start = self._parse_uint(path, row, fields[2], "start time", UINT32_MAX)
            stop = self._parse_uint(path, row, fields[3], "stop time", UINT32_MAX)

            if volume >= header.num_volumes or slice_index >= header.num_slices:
                raise RecordIndexError(
                    f"volume {volume} slice {slice_index} outside "
                    f"{header.num_volumes} volumes x {header.num_slices} slices",
                    path,
                    row.line_number,
                )

            cell = (volume, slice_index)
            if cell in first_lines:
                raise DuplicateRecordError(
                    f"duplicate timing data for volume {volume} slice {slice_index} "
                    f"(first seen at line {first_lines[cell]})",
                    path,
                    row.line_number,
                )
            first_lines[cell] = row.line_number
            absolute[EDGE_START, volume, slice_index] = start
            absolute[EDGE_STOP, volume, slice_index] = stop

        recorded = np.zeros(shape, dtype=bool)
        for volume, slice_index in first_lines:
            recorded[volume, slice_index] = True

        # Timestamps before FirstTime saturate to 0 like unsigned arithmetic
        relative = np.where(recorded, absolute - header.first_time, 0)
        timing_map = np.clip(relative, 0, None).astype(np.uint32)

        if not recorded.all():
            logger.warning(
                f"{path}: {int((~recorded).sum())} of {recorded.size} "
                "volume/slice cells have no timing data"
            )

        return AcquisitionInfoLog(
            path=path, header=header, timing_map=timing_map, recorded=recorded
        )
