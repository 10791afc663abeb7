"""
Unit tests for the plotting helpers (Agg backend).
"""

import pandas as pd
import pytest
from matplotlib.figure import Figure

from langtour.basics import fibonacci
from langtour.plotting import (
    plot_convergence,
    plot_fibonacci,
    plot_summation_functions,
    plot_timings,
    plot_xy,
    save_figure,
)


class TestPlotXY:
    """Test cases for the generic x/y plot."""

    def test_labels(self):
        fig = plot_xy([1, 2, 3], [4, 5, 6], title='T', xlabel='X', ylabel='Y')
        ax = fig.axes[0]
        assert isinstance(fig, Figure)
        assert ax.get_title() == 'T'
        assert ax.get_xlabel() == 'X'
        assert ax.get_ylabel() == 'Y'
        assert len(ax.lines) == 1

    def test_reuses_axes(self):
        fig = plot_xy([1, 2], [1, 2], label='a')
        again = plot_xy([1, 2], [2, 1], ax=fig.axes[0], label='b')
        assert again is fig
        assert len(fig.axes[0].lines) == 2
        assert [t.get_text() for t in fig.axes[0].get_legend().get_texts()] == ['a', 'b']

    @pytest.mark.parametrize("style", ['scatter', 'bar'])
    def test_other_styles(self, style):
        fig = plot_xy([1, 2, 3], [3, 2, 1], style=style)
        assert isinstance(fig, Figure)

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            plot_xy([1, 2], [1])

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            plot_xy([1], [1], style='pie')


class TestTourFigures:
    """Test cases for the figure builders used in the notebook."""

    def test_summation_functions(self):
        fig = plot_summation_functions(1, 10)
        texts = [t.get_text() for t in fig.axes[0].get_legend().get_texts()]
        assert len(fig.axes[0].lines) == 2
        assert any('150' in t for t in texts)
        assert any('425' in t for t in texts)

    def test_fibonacci(self):
        fig = plot_fibonacci(fibonacci())
        line = fig.axes[0].lines[0]
        assert len(line.get_xdata()) == 25

    def test_convergence(self):
        table = pd.DataFrame({'n': [100, 10_000], 'abs_error': [0.1, 0.01]})
        fig = plot_convergence(table)
        ax = fig.axes[0]
        assert ax.get_xscale() == 'log'
        assert ax.get_yscale() == 'log'
        assert len(ax.lines) == 2

    def test_convergence_missing_columns(self):
        with pytest.raises(ValueError):
            plot_convergence(pd.DataFrame({'n': [1]}))

    def test_timings(self):
        table = pd.DataFrame({'method': ['serial', 'parallel'], 'seconds': [2.0, 0.5]})
        fig = plot_timings(table)
        assert len(fig.axes[0].patches) == 2


class TestSaveFigure:
    """Test cases for saving figures."""

    def test_creates_parent_dirs(self, tmp_path):
        fig = plot_xy([0, 1], [0, 1])
        out = save_figure(fig, tmp_path / 'nested' / 'fig.png', dpi=50)
        assert out.exists()
        assert out.stat().st_size > 0
