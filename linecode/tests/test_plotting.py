import numpy as np

from d2d import SCHEME_LABELS, simulate_d2d
from plotting import TRACE_NAME, plot_bits, plot_compare, plot_encoded


def test_encoded_figure_is_stepped():
    fig = plot_encoded(simulate_d2d("1011", "NRZ-I"))
    tr = fig.data[0]
    assert tr.line.shape == "hv"
    assert tr.name == TRACE_NAME
    assert tr.line.color == "blue"
    assert tr.line.width == 5
    assert np.allclose(tr.x, [1, 2, 3, 4, 5])

def test_encoded_figure_axes():
    fig = plot_encoded(simulate_d2d("10", "Manchester"))
    assert fig.layout.xaxis.title.text == "Time (t)"
    assert fig.layout.yaxis.title.text == "Volts (V)"
    assert tuple(fig.layout.yaxis.range) == (-5, 5)
    assert fig.layout.yaxis.dtick == 1
    assert list(fig.layout.xaxis.ticktext) == ["0", "", "", "", "1"]

def test_encoded_figure_for_empty_input():
    fig = plot_encoded(simulate_d2d("", "NRZ-L"))
    assert len(fig.data[0].y) == 0

def test_bits_figure_holds_last_bit():
    fig = plot_bits([1, 0, 1])
    assert list(fig.data[0].y) == [1, 0, 1, 1]

def test_compare_has_every_scheme():
    fig = plot_compare("0110")
    assert [tr.name for tr in fig.data] == SCHEME_LABELS
