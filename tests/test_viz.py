"""Tests for rreftools.viz module."""
import matplotlib

matplotlib.use("Agg")

import pytest

from rreftools.viz.draw import draw_reduction


def test_draw_reduction_saves_png(tmp_path):
    out = tmp_path / "red.png"
    R = draw_reduction([[1, 2], [2, 4]], save_path=str(out))
    assert out.exists()
    assert R == [pytest.approx([1, 2]), pytest.approx([0, 0])]


def test_draw_reduction_zero_matrix(tmp_path):
    out = tmp_path / "zero.png"
    R = draw_reduction([[0, 0, 0]], save_path=str(out))
    assert out.exists()
    assert R == [[0.0, 0.0, 0.0]]
