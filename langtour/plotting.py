"""
Plotting Module

Matplotlib helpers for the figures in the tour: labelled x/y series,
the summation functions, the Fibonacci sequence and Monte Carlo
convergence and timing charts.
"""

from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from langtour.basics import f, g, sum_function


def plot_xy(
    x: Sequence[float],
    y: Sequence[float],
    title: str = '',
    xlabel: str = 'x',
    ylabel: str = 'y',
    ax: Optional[Axes] = None,
    label: Optional[str] = None,
    style: str = 'line',
    color: Optional[str] = None
) -> Figure:
    """
    Plot a labelled x/y series.

    Parameters
    ----------
    x, y : sequence of float
        Data of equal length
    title, xlabel, ylabel : str
        Chart labels
    ax : matplotlib Axes, optional
        Draw into an existing axes instead of a new figure
    label : str, optional
        Legend entry for the series
    style : str
        'line', 'scatter' or 'bar'
    color : str, optional
        Matplotlib colour

    Returns
    -------
    matplotlib.figure.Figure
        Figure holding the chart
    """
    if len(x) != len(y):
        raise ValueError(f"x and y must have the same length ({len(x)} != {len(y)})")

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 5))
    else:
        fig = ax.figure

    if style == 'line':
        ax.plot(x, y, marker='o', markersize=3, label=label, color=color)
    elif style == 'scatter':
        ax.scatter(x, y, s=12, label=label, color=color)
    elif style == 'bar':
        ax.bar(x, y, label=label, color=color)
    else:
        raise ValueError(f"Unknown style: {style}. Use 'line', 'scatter' or 'bar'")

    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.grid(linestyle='--', alpha=0.5)
    if label is not None:
        ax.legend()

    return fig


def plot_summation_functions(start: int = 1, stop: int = 10) -> Figure:
    """Plot f(x) = 2x + 4 and g(x) = x² + 4 over [start, stop] with their sums."""
    xs = list(range(start, stop + 1))

    fig, ax = plt.subplots(figsize=(8, 5))
    plot_xy(xs, [f(x) for x in xs], ax=ax, label=f"f(x) = 2x + 4, Σ = {sum_function(f, start, stop):g}")
    plot_xy(xs, [g(x) for x in xs], ax=ax, label=f"g(x) = x² + 4, Σ = {sum_function(g, start, stop):g}",
            title=f'Summation over [{start}, {stop}]', xlabel='x', ylabel='value')
    return fig


def plot_fibonacci(values: Sequence[int]) -> Figure:
    """Plot a Fibonacci sequence against its index on a log scale."""
    fig = plot_xy(
        list(range(len(values))), list(values),
        title='Fibonacci sequence', xlabel='index', ylabel='value'
    )
    # log scale cannot show the leading zero
    fig.axes[0].set_yscale('symlog')
    return fig


def plot_convergence(table: pd.DataFrame) -> Figure:
    """
    Absolute error of the π estimate against sample count, log-log.

    Parameters
    ----------
    table : pd.DataFrame
        Output of ``monte_carlo.convergence_table`` (columns 'n', 'abs_error')
    """
    missing = {'n', 'abs_error'} - set(table.columns)
    if missing:
        raise ValueError(f"Convergence table is missing columns: {sorted(missing)}")

    n = table['n'].to_numpy(dtype=float)
    fig = plot_xy(n, table['abs_error'].to_numpy(), label='|estimate - π|',
                  title='Monte Carlo convergence', xlabel='samples', ylabel='absolute error')
    ax = fig.axes[0]

    # reference slope 1/sqrt(n), anchored at the first point
    reference = np.sqrt(n[0]) * max(float(table['abs_error'].iloc[0]), 1e-12) / np.sqrt(n)
    ax.plot(n, reference, linestyle=':', color='gray', label='∝ 1/√n')
    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.legend()
    return fig


def plot_timings(table: pd.DataFrame) -> Figure:
    """Bar chart of the serial/parallel timing comparison."""
    fig = plot_xy(
        list(table['method']), list(table['seconds']), style='bar',
        title='Monte Carlo π: serial vs parallel', xlabel='', ylabel='Execution Time (s)',
        color='#e74c3c'
    )
    ax = fig.axes[0]
    for bar in ax.patches:
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width() / 2., height, f'{height:.2f} s',
                ha='center', va='bottom')
    return fig


def save_figure(fig: Figure, path: Union[str, Path], dpi: int = 300) -> Path:
    """Save a figure, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches='tight')
    return path
