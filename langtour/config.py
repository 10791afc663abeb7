"""
Configuration

Paths and tunables shared by the notebook, the scripts and the package.
Directories can be redirected with environment variables.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent.parent

DATA_DIR = Path(os.environ.get("LANGTOUR_DATA_DIR", BASE_DIR / "data"))
RAW_DIR = DATA_DIR / "raw"
OUTPUT_DIR = Path(os.environ.get("LANGTOUR_OUTPUT_DIR", BASE_DIR / "outputs"))
NOTEBOOK_DIR = BASE_DIR / "notebooks"
NOTEBOOK_PATH = NOTEBOOK_DIR / "language_tour.ipynb"

# ============================================================
# MONTE CARLO
# ============================================================

DEFAULT_SAMPLES = 10_000_000
# samples drawn per vectorised block
CHUNK_SIZE = 1_000_000
DEFAULT_WORKERS = os.cpu_count() or 1

# ============================================================
# SEQUENCES
# ============================================================

DEFAULT_FIB_LENGTH = 25

# ============================================================
# NCBI ENTREZ
# ============================================================

EUTILS_BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
NCBI_TOOL = "langtour"
NCBI_EMAIL = os.environ.get("LANGTOUR_NCBI_EMAIL", "")
NCBI_API_KEY = os.environ.get("LANGTOUR_NCBI_API_KEY")
REQUEST_TIMEOUT = 30

# Human insulin mRNA and the INS gene
EXAMPLE_ACCESSION = "NM_000207.3"
EXAMPLE_GENE_ID = "3630"
EXAMPLE_FASTA = RAW_DIR / "ins_mrna.fasta"

# ============================================================
# MAP
# ============================================================

MAP_ZOOM = 5
MAP_TILES = "OpenStreetMap"


def create_directories() -> dict:
    """Create directory structure for data, outputs and notebooks."""
    dirs = {
        'data': DATA_DIR,
        'raw': RAW_DIR,
        'outputs': OUTPUT_DIR,
        'notebooks': NOTEBOOK_DIR,
    }

    for path in dirs.values():
        path.mkdir(parents=True, exist_ok=True)

    return dirs
