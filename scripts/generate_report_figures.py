import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from langtour import config
from langtour.basics import fibonacci
from langtour.logging_config import setup_logging
from langtour.monte_carlo import compare_timings, convergence_table
from langtour.plotting import (
    plot_convergence,
    plot_fibonacci,
    plot_summation_functions,
    plot_timings,
    save_figure,
)

OUTPUT_DIR = config.OUTPUT_DIR


def generate_visuals():
    print("Generating tour figures...")

    fig1 = plot_summation_functions(1, 10)
    print(f"Saved {save_figure(fig1, OUTPUT_DIR / 'fig1_summation.png')}")

    fig2 = plot_fibonacci(fibonacci())
    print(f"Saved {save_figure(fig2, OUTPUT_DIR / 'fig2_fibonacci.png')}")

    table = convergence_table(sample_sizes=[10**k for k in range(2, 8)], seed=2024)
    print(table.to_string(index=False))
    fig3 = plot_convergence(table)
    print(f"Saved {save_figure(fig3, OUTPUT_DIR / 'fig3_convergence.png')}")


def generate_benchmark_chart(n: int = config.DEFAULT_SAMPLES):
    print("Generating Benchmark Chart...")
    # machine-dependent; the article quotes whatever this run measures
    timings = compare_timings(n, seed=2024, repeats=3)
    print(timings.to_string(index=False))

    serial, parallel = timings['seconds'].iloc[0], timings['seconds'].iloc[1]
    fig = plot_timings(timings)
    ax = fig.axes[0]
    ax.text(0.5, 0.9, f'{serial / parallel:.1f}x Speedup', transform=ax.transAxes,
            ha='center', fontsize=12, fontweight='bold',
            bbox=dict(facecolor='white', alpha=0.8, edgecolor='none'))
    print(f"Saved {save_figure(fig, OUTPUT_DIR / 'fig4_benchmark.png')}")


if __name__ == "__main__":
    setup_logging()
    generate_visuals()
    generate_benchmark_chart()
