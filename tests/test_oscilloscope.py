# tests/test_oscilloscope.py
"""Tests for the scope buffer and text trace."""

import numpy as np

from oscilloscope import ScopeBuffer, render_trace


class TestScopeBuffer:
    """Ring buffer of recent output."""

    def test_read_latest(self):
        buf = ScopeBuffer(8)
        buf.write(np.arange(5))
        assert buf.read(3).tolist() == [2.0, 3.0, 4.0]

    def test_wraps_around(self):
        buf = ScopeBuffer(8)
        buf.write(np.arange(5))
        buf.write(np.arange(5, 10))
        assert buf.read(8).tolist() == [float(i) for i in range(2, 10)]

    def test_oversized_write_keeps_newest(self):
        buf = ScopeBuffer(8)
        buf.write(np.arange(20))
        assert buf.read(8).tolist() == [float(i) for i in range(12, 20)]

    def test_clear(self):
        buf = ScopeBuffer(4)
        buf.write(np.ones(4))
        buf.clear()
        assert not np.any(buf.read(4))


class TestRenderTrace:
    """Text rendering of a sample window."""

    def test_no_signal_is_flat_centre_line(self):
        rows = render_trace([], width=20, height=5)
        assert len(rows) == 5
        assert all(len(row) == 20 for row in rows)
        assert rows[2] == "*" * 20
        assert rows[0].strip() == ""

    def test_full_scale_positive_is_top_row(self):
        rows = render_trace(np.ones(100), width=10, height=5)
        assert rows[0] == "*" * 10

    def test_full_scale_negative_is_bottom_row(self):
        rows = render_trace(-np.ones(100), width=10, height=5)
        assert rows[-1] == "*" * 10

    def test_out_of_range_samples_are_clipped(self):
        rows = render_trace(np.full(10, 5.0), width=10, height=5)
        assert rows[0] == "*" * 10

    def test_one_point_per_column(self):
        samples = np.sin(np.linspace(0, 2 * np.pi, 500))
        rows = render_trace(samples, width=40, height=9)
        for x in range(40):
            assert sum(row[x] == "*" for row in rows) == 1
