"""Session result model."""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from physiolog.constants import SAMPLE_PADDING, TICK_DURATION_MS


@dataclass
class SessionResult:
    """
    Time-aligned physio data of one measurement.

    All arrays share the same time axis: index 0 is the tick at FirstTime.
    Times are in clock ticks (2.5 ms per tick).

    Attributes:
        uuid: Measurement identifier shared by all five logs
        slice_map: (2, volumes, slices) start/stop ticks of every slice,
            relative to FirstTime
        acq: 1 while any slice is being acquired, 0 otherwise
        channels: Active channels only (ECG1..ECG4, RESP, PULS, EXT, EXT2);
            a channel whose samples are all zero is absent
    """

    uuid: str
    slice_map: np.ndarray
    acq: np.ndarray
    num_slices: int
    num_volumes: int
    first_time: int
    last_time: int
    channels: dict[str, np.ndarray] = field(default_factory=dict)

    @property
    def actual_samples(self) -> int:
        """Scan duration in ticks."""
        return self.last_time - self.first_time + 1

    @property
    def expected_samples(self) -> int:
        return self.actual_samples + SAMPLE_PADDING

    @property
    def duration_seconds(self) -> float:
        return self.actual_samples * TICK_DURATION_MS / 1000.0

    @property
    def active_channels(self) -> list[str]:
        return list(self.channels)

    def __getitem__(self, name: str) -> np.ndarray:
        return self.channels[name]

    def __contains__(self, name: object) -> bool:
        return name in self.channels

    def summary(self) -> dict[str, Any]:
        """Scan geometry and timing for reporting."""
        return {
            "uuid": self.uuid,
            "num_slices": self.num_slices,
            "num_volumes": self.num_volumes,
            "first_time": self.first_time,
            "last_time": self.last_time,
            "duration_ticks": self.actual_samples,
            "duration_seconds": self.duration_seconds,
            "channels": self.active_channels,
        }
