"""
End-to-end tests for reading a five-file physio log set.

These tests write complete synthetic log sets and verify:
- time alignment of every channel to the Info file's FirstTime
- the acquisition-active array
- cross-file UUID checks and fatal error propagation
- omission of all-zero channels
"""

import logging

import numpy as np
import pytest

from physiolog import read_physio
from physiolog.parsers.base import (
    ConsistencyViolationError,
    FormatVersionMismatchError,
    InvalidChannelError,
    InvalidTimeRangeError,
    MissingInputError,
    UuidMismatchError,
)
from physiolog.session import SessionAssembler, SessionResult
from tests.helpers.physio_logs import DEFAULT_UUID, write_log, write_session


class TestReadPhysio:
    """Tests for a consistent log set."""

    def test_result_contents(self, physio_base):
        result = read_physio(physio_base)

        assert isinstance(result, SessionResult)
        assert result.uuid == DEFAULT_UUID
        assert result.num_slices == 2
        assert result.num_volumes == 1
        assert result.first_time == 100
        assert result.last_time == 109
        assert result.actual_samples == 10
        assert result.expected_samples == 18
        assert result.duration_seconds == pytest.approx(0.025)

    def test_acquisition_array(self, physio_base):
        result = read_physio(physio_base)

        assert len(result.acq) == 18
        assert np.flatnonzero(result.acq).tolist() == [0, 1, 2, 3, 5, 6, 7]
        assert result.slice_map[:, 0, 1].tolist() == [5, 7]

    def test_truncated_scan_marks_first_tick(self, logs_dir):
        base = write_session(logs_dir, info_rows=[(0, 1, 103, 104)])

        result = read_physio(base)

        assert np.flatnonzero(result.acq).tolist() == [0, 3, 4]

    def test_only_active_channels_returned(self, physio_base):
        result = read_physio(physio_base)

        assert result.active_channels == ["ECG1", "ECG2", "RESP", "EXT"]
        assert "ECG3" not in result
        assert "PULS" not in result
        assert "EXT2" not in result
        with pytest.raises(KeyError):
            result["ECG4"]

    def test_channel_alignment(self, physio_base):
        result = read_physio(physio_base)

        assert result["ECG1"][:4].tolist() == [2048, 0, 2050, 0]
        assert result["ECG2"][:3].tolist() == [0, 1900, 0]
        assert np.flatnonzero(result["RESP"]).tolist() == [5, 6, 7]
        assert set(result["RESP"][5:8].tolist()) == {7}
        assert np.flatnonzero(result["EXT"]).tolist() == [4]

    def test_all_arrays_share_length(self, physio_base):
        result = read_physio(physio_base)

        lengths = {len(values) for values in result.channels.values()}
        assert lengths == {result.expected_samples}

    def test_summary_logged(self, physio_base, caplog):
        with caplog.at_level(logging.INFO):
            read_physio(physio_base)

        assert "Slices in scan:      2" in caplog.text
        assert "Total scan duration: 10 ticks" in caplog.text
        assert "Total scan duration: 0.0250 s" in caplog.text

    def test_summary_dict(self, physio_base):
        summary = read_physio(physio_base).summary()

        assert summary["duration_ticks"] == 10
        assert summary["channels"] == ["ECG1", "ECG2", "RESP", "EXT"]

    def test_nonstandard_version(self, logs_dir):
        base = write_session(logs_dir, info_kwargs={"version": "EJA_2"})

        with pytest.raises(FormatVersionMismatchError):
            read_physio(base)

        # Signal logs still declare EJA_1
        with pytest.raises(FormatVersionMismatchError, match="_ECG.log"):
            SessionAssembler(expected_version="EJA_2").assemble(base)


class TestSessionErrors:
    """Tests for fatal cross-file errors."""

    @pytest.mark.parametrize("data_type", ["ECG", "RESP", "PULS", "EXT"])
    def test_uuid_mismatch(self, logs_dir, data_type):
        base = write_session(logs_dir, uuids={data_type: "another-session"})

        with pytest.raises(UuidMismatchError, match=f"and {data_type}") as exc_info:
            read_physio(base)

        assert isinstance(exc_info.value, ConsistencyViolationError)
        assert exc_info.value.path.name.endswith(f"_{data_type}.log")

    @pytest.mark.parametrize("suffix", ["_Info.log", "_ECG.log", "_EXT.log"])
    def test_missing_file(self, physio_base, suffix):
        missing = physio_base.with_name(physio_base.name + suffix)
        missing.unlink()

        with pytest.raises(MissingInputError, match="not found") as exc_info:
            read_physio(physio_base)

        assert exc_info.value.path == missing

    def test_invalid_time_range_before_signal_logs(self, logs_dir):
        base = write_session(
            logs_dir, info_kwargs={"first_time": 109, "last_time": 109}
        )
        # A broken ECG log would fail if it were read
        write_log(base.with_name(base.name + "_ECG.log"), ["garbage"])

        with pytest.raises(InvalidTimeRangeError, match="not greater"):
            read_physio(base)

    def test_duplicate_timing_aborts(self, logs_dir):
        base = write_session(
            logs_dir, info_rows=[(0, 0, 100, 103), (0, 1, 105, 107), (0, 0, 104, 104)]
        )

        with pytest.raises(ConsistencyViolationError, match="duplicate"):
            read_physio(base)

    def test_invalid_channel_aborts(self, logs_dir):
        base = write_session(logs_dir, ecg_rows=[(100, "ECG9", 1, "0")])

        with pytest.raises(InvalidChannelError):
            read_physio(base)

    def test_all_zero_signals(self, logs_dir):
        base = write_session(
            logs_dir,
            ecg_rows=[(100, "ECG3", 0, "0")],
            resp_rows=[],
            puls_rows=[],
            ext_rows=[(101, "EXT2", 0, "0")],
        )

        result = read_physio(base)

        assert result.channels == {}
        assert result.acq.any()
