"""Tests for the acquisition-active array."""

import numpy as np

from physiolog.session.assembler import build_acquisition_array


def timing(windows, shape):
    """Build a (2, volumes, slices) map from {(v, s): (start, stop)}."""
    timing_map = np.zeros((2, *shape), dtype=np.uint32)
    for (volume, slice_index), (start, stop) in windows.items():
        timing_map[:, volume, slice_index] = (start, stop)
    return timing_map


class TestBuildAcquisitionArray:
    """Tests for build_acquisition_array."""

    def test_inclusive_windows(self):
        timing_map = timing({(0, 0): (0, 3), (0, 1): (5, 7)}, (1, 2))

        acq = build_acquisition_array(timing_map, 18)

        assert acq.dtype == np.uint16
        assert len(acq) == 18
        assert np.flatnonzero(acq).tolist() == [0, 1, 2, 3, 5, 6, 7]

    def test_overlapping_windows_stay_binary(self):
        timing_map = timing(
            {(0, 0): (2, 6), (0, 1): (4, 8), (1, 0): (4, 4), (1, 1): (3, 3)},
            (2, 2),
        )

        acq = build_acquisition_array(timing_map, 12)

        assert set(acq.tolist()) == {0, 1}
        assert np.flatnonzero(acq).tolist() == [2, 3, 4, 5, 6, 7, 8]

    def test_window_past_end_is_clamped(self):
        timing_map = timing({(0, 0): (8, 30)}, (1, 1))

        acq = build_acquisition_array(timing_map, 10)

        assert acq.tolist() == [0] * 8 + [1, 1]

    def test_unrecorded_cells_mark_first_tick(self):
        timing_map = timing({(0, 1): (3, 4)}, (1, 2))

        acq = build_acquisition_array(timing_map, 6)

        assert acq.tolist() == [1, 0, 0, 1, 1, 0]

    def test_single_tick_window(self):
        timing_map = timing({(0, 0): (5, 5)}, (1, 1))

        acq = build_acquisition_array(timing_map, 8)

        assert np.flatnonzero(acq).tolist() == [5]
