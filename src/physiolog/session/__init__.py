"""Session assembly: five log files in, one time-aligned result out."""

from physiolog.session.assembler import (
    SessionAssembler,
    build_acquisition_array,
    read_physio,
)
from physiolog.session.result import SessionResult

__all__ = [
    "SessionAssembler",
    "SessionResult",
    "build_acquisition_array",
    "read_physio",
]
