"""Log header type definitions."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from physiolog.constants import SAMPLE_PADDING


class LogDataType(str, Enum):
    """The five kinds of log file written for one measurement."""

    ACQUISITION_INFO = "ACQUISITION_INFO"
    ECG = "ECG"
    RESP = "RESP"
    PULS = "PULS"
    EXT = "EXT"

    @property
    def is_signal(self) -> bool:
        """True for the sampled physio kinds, False for the Info file."""
        return self is not LogDataType.ACQUISITION_INFO


class LogHeader(BaseModel):
    """Header fields shared by every log file."""

    log_version: str = Field(description="Declared log format version")
    data_type: LogDataType = Field(description="Declared LogDataType")
    uuid: str = Field(min_length=1, description="Measurement identifier")
    extra: dict[str, str] = Field(
        default_factory=dict, description="Unrecognised header assignments"
    )


class AcquisitionHeader(LogHeader):
    """Header of an _Info.log file."""

    num_slices: int = Field(ge=1, description="Slices per volume")
    num_volumes: int = Field(ge=1, description="Volumes in the scan")
    first_time: int = Field(ge=0, description="First timestamp (ticks)")
    last_time: int = Field(ge=0, description="Last timestamp (ticks)")

    @property
    def actual_samples(self) -> int:
        """Scan duration in ticks, both ends inclusive."""
        return self.last_time - self.first_time + 1

    @property
    def expected_samples(self) -> int:
        """Length of every per-tick array built for this scan."""
        return self.actual_samples + SAMPLE_PADDING


class SignalHeader(LogHeader):
    """Header of an ECG, RESP, PULS or EXT log file."""

    sample_time: int = Field(ge=1, description="Ticks covered by one sample")

    @model_validator(mode="after")
    def check_signal_kind(self) -> "SignalHeader":
        if not self.data_type.is_signal:
            raise ValueError(f"{self.data_type.value} is not a signal log type")
        return self


class TimeBase(BaseModel):
    """Scan time base shared by all signal logs of one measurement."""

    first_time: int = Field(ge=0, description="First scan timestamp (ticks)")
    expected_samples: int = Field(ge=1, description="Per-tick array length")

    @classmethod
    def from_header(cls, header: AcquisitionHeader) -> "TimeBase":
        return cls(
            first_time=header.first_time,
            expected_samples=header.expected_samples,
        )


class SessionFiles(BaseModel):
    """The five companion log files of one measurement."""

    base: Path = Field(description="Path prefix shared by all five files")
    paths: dict[LogDataType, Path] = Field(description="Log file per data type")

    @property
    def missing(self) -> list[Path]:
        """Companion files that do not exist, in read order."""
        return [path for path in self.paths.values() if not path.is_file()]

    @property
    def is_complete(self) -> bool:
        return not self.missing
