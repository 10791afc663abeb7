"""
Notebook Module

Builds, writes and executes the tutorial notebook. The cell sources live
here so the notebook can be regenerated instead of hand-edited.
"""

import os
import logging
from pathlib import Path
from typing import List, Tuple, Union

import nbformat
from nbformat import NotebookNode
from nbconvert.preprocessors import ExecutePreprocessor

from langtour.config import NOTEBOOK_PATH


logger = logging.getLogger(__name__)


# (markdown, code) pairs; an empty code string means a markdown-only section
SECTIONS: List[Tuple[str, str]] = [
    (
        "# A Tour of Numerical Python\n"
        "\n"
        "Companion notebook for the magazine article. Each section is one stop:\n"
        "Unicode identifiers, a summation helper, Monte Carlo estimation of π,\n"
        "plotting, sequence analysis, an NCBI lookup and a Python → JavaScript map.",
        "import sys\n"
        "from pathlib import Path\n"
        "\n"
        "# Make the package importable when running from notebooks/\n"
        "sys.path.insert(0, str(Path.cwd().parent))\n"
        "\n"
        "import math\n"
        "import matplotlib.pyplot as plt\n"
        "\n"
        "from langtour import config\n"
        "from langtour.logging_config import setup_logging\n"
        "\n"
        "logger = setup_logging()\n"
        "config.create_directories()\n"
        "OUTPUT_DIR = config.OUTPUT_DIR",
    ),
    (
        "## 1. Unicode identifiers\n"
        "\n"
        "Identifiers may use any Unicode letter, so formulas can read like the textbook.",
        "from langtour.basics import π, τ, describe_circle, format_circle, polar_to_cartesian\n"
        "\n"
        "print(f\"π = {π}, τ = {τ}\")\n"
        "for r in (1, 2.5, 10):\n"
        "    print(format_circle(describe_circle(r)))\n"
        "\n"
        "θ = π / 3\n"
        "print(\"polar (2, π/3) ->\", polar_to_cartesian(2, θ))",
    ),
    (
        "## 2. Functions as arguments\n"
        "\n"
        "`sum_function` applies any function over an inclusive integer range.",
        "from langtour.basics import f, g, sum_function\n"
        "from langtour.plotting import plot_summation_functions\n"
        "\n"
        "print(\"Σ f(x), x = 1..10:\", sum_function(f, 1, 10))\n"
        "print(\"Σ g(x), x = 1..10:\", sum_function(g, 1, 10))\n"
        "print(\"Σ x³,   x = 1..10:\", sum_function(lambda x: x ** 3, 1, 10))\n"
        "\n"
        "fig = plot_summation_functions(1, 10)",
    ),
    (
        "## 3. Sequences and guards\n"
        "\n"
        "A generator that refuses malformed input instead of returning garbage.",
        "from langtour.basics import fibonacci\n"
        "from langtour.plotting import plot_fibonacci\n"
        "\n"
        "fib = fibonacci()\n"
        "print(len(fib), fib[:10])\n"
        "\n"
        "try:\n"
        "    fibonacci(1)\n"
        "except ValueError as e:\n"
        "    print(f\"Rejected: {e}\")\n"
        "\n"
        "fig = plot_fibonacci(fib)",
    ),
    (
        "## 4. Monte Carlo estimation of π\n"
        "\n"
        "Draw points in the unit square; the fraction inside the quarter circle tends to π/4.\n"
        "The error shrinks like 1/√n.",
        "from langtour.monte_carlo import estimate_pi, estimate_pi_with_error, convergence_table\n"
        "from langtour.plotting import plot_convergence\n"
        "\n"
        "print(f\"serial estimate: {estimate_pi(1_000_000, seed=42):.6f}\")\n"
        "\n"
        "result = estimate_pi_with_error(1_000_000, seed=42)\n"
        "print(f\"{result['estimate']:.5f} ± {result['stderr']:.5f} \"\n"
        "      f\"(95% CI {result['ci_low']:.5f} .. {result['ci_high']:.5f})\")\n"
        "\n"
        "table = convergence_table(seed=1)\n"
        "fig = plot_convergence(table)\n"
        "table",
    ),
    (
        "### 4.1 In parallel\n"
        "\n"
        "The samples are split across a process pool and the partial counts are added.\n"
        "Timings depend on the machine; treat them as illustration only.",
        "from langtour.monte_carlo import estimate_pi_parallel, compare_timings\n"
        "from langtour.plotting import plot_timings\n"
        "\n"
        "print(f\"parallel estimate: {estimate_pi_parallel(10_000_000, workers=4, seed=42):.6f}\")\n"
        "\n"
        "timings = compare_timings(10_000_000, workers=4, seed=42)\n"
        "fig = plot_timings(timings)\n"
        "timings",
    ),
    (
        "## 5. Plotting\n"
        "\n"
        "Any labelled x/y series goes through `plot_xy`.",
        "from langtour.plotting import plot_xy, save_figure\n"
        "\n"
        "xs = [i * τ / 100 for i in range(101)]\n"
        "fig = plot_xy(xs, [math.sin(x) for x in xs], label='sin')\n"
        "plot_xy(xs, [math.cos(x) for x in xs], ax=fig.axes[0], label='cos',\n"
        "        title='sin and cos over one turn', xlabel='θ (rad)', ylabel='value')\n"
        "save_figure(fig, OUTPUT_DIR / 'trig.png')",
    ),
    (
        "## 6. Sequence analysis\n"
        "\n"
        "Read a FASTA record, cut out the first open reading frame, transcribe it and\n"
        "translate it to protein.",
        "from langtour import entrez, sequences\n"
        "\n"
        "if not config.EXAMPLE_FASTA.exists():\n"
        "    entrez.fetch_fasta(config.EXAMPLE_ACCESSION, config.EXAMPLE_FASTA)\n"
        "\n"
        "records = sequences.load_fasta(config.EXAMPLE_FASTA)\n"
        "record = records[0]\n"
        "print(sequences.summarize_records(records))\n"
        "\n"
        "start = str(record.seq).find('ATG')\n"
        "orf = sequences.extract_subsequence(record, start, len(record.seq))\n"
        "rna = sequences.transcribe(orf)\n"
        "protein = sequences.translate(rna, to_stop=True)\n"
        "print(f\"RNA (first 60 nt): {rna[:60]}\")\n"
        "print(f\"protein ({len(protein)} aa): {protein}\")",
    ),
    (
        "### 6.1 Pairwise alignment\n"
        "\n"
        "With match 0, mismatch -1 and gap -1 the negated global alignment score is the edit distance.",
        "print(sequences.alignment_distance('KITTEN', 'SITTING'))\n"
        "print(sequences.alignment_distance('GATTACA', 'GCATGCU'))\n"
        "print(sequences.best_alignment('GATTACA', 'GCATGCU'))",
    ),
    (
        "## 7. Remote lookup\n"
        "\n"
        "NCBI E-utilities return XML; a few fields are pulled out with ElementTree paths.",
        "gene = entrez.lookup_gene(config.EXAMPLE_GENE_ID)\n"
        "for key, value in gene.items():\n"
        "    print(f\"{key:>13}: {value}\")",
    ),
    (
        "## 8. Python → JavaScript\n"
        "\n"
        "folium writes a Leaflet.js page; the embedded script below runs in the browser\n"
        "and shows the coordinates of any click.",
        "from langtour.interop import EMBEDDED_SCRIPT, Place, build_map, embed_script, render_map\n"
        "\n"
        "places = [\n"
        "    Place('London', 51.5074, -0.1278, 'Magazine office'),\n"
        "    Place('Cambridge', 52.2053, 0.1218, 'Sanger Institute nearby'),\n"
        "    Place('Edinburgh', 55.9533, -3.1883),\n"
        "]\n"
        "\n"
        "print(EMBEDDED_SCRIPT)\n"
        "render_map(places, OUTPUT_DIR / 'tour_map.html')\n"
        "\n"
        "m = build_map(places)\n"
        "embed_script(m)\n"
        "m",
    ),
]


def build_notebook(sections: List[Tuple[str, str]] = SECTIONS) -> NotebookNode:
    """
    Assemble the tutorial as an nbformat v4 notebook.

    Parameters
    ----------
    sections : list of (markdown, code)
        Cell sources in order

    Returns
    -------
    NotebookNode
        Notebook with a Python 3 kernelspec
    """
    nb = nbformat.v4.new_notebook()
    nb.metadata['kernelspec'] = {
        'name': 'python3',
        'display_name': 'Python 3',
        'language': 'python',
    }
    nb.metadata['language_info'] = {'name': 'python'}

    for markdown, code in sections:
        if markdown:
            nb.cells.append(nbformat.v4.new_markdown_cell(markdown))
        if code:
            nb.cells.append(nbformat.v4.new_code_cell(code))

    return nb


def write_notebook(path: Union[str, Path] = NOTEBOOK_PATH) -> Path:
    """Build, validate and write the notebook."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    nb = build_notebook()
    nbformat.validate(nb)
    with open(path, 'w', encoding='utf-8') as f:
        nbformat.write(nb, f)

    logger.info("Notebook with %d cells written to %s", len(nb.cells), path)
    return path


def execute_notebook(
    path: Union[str, Path] = NOTEBOOK_PATH,
    timeout: int = 600,
    kernel_name: str = 'python3'
) -> NotebookNode:
    """
    Run every cell of a notebook with nbconvert.

    The notebook executes from its own directory. A failing cell raises
    ``nbconvert.preprocessors.CellExecutionError``.

    Returns
    -------
    NotebookNode
        The executed notebook (outputs filled in)
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        nb = nbformat.read(f, as_version=4)

    nb_dir = path.parent.resolve()
    ep = ExecutePreprocessor(timeout=timeout, kernel_name=kernel_name)

    cwd = os.getcwd()
    try:
        os.chdir(nb_dir)
        logger.info("Executing %s (this may take a few minutes)...", path.name)
        ep.preprocess(nb, {'metadata': {'path': str(nb_dir)}})
    finally:
        os.chdir(cwd)

    return nb
