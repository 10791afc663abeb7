import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from langtour import config
from langtour.logging_config import setup_logging
from langtour.notebook import execute_notebook, write_notebook


def validate_notebook(nb_path: Path = config.NOTEBOOK_PATH):
    print(f"Validating {nb_path}...")

    if not nb_path.exists():
        print("Notebook missing, building it first...")
        write_notebook(nb_path)

    try:
        print("Starting cell-by-cell execution (this may take a few minutes)...")
        execute_notebook(nb_path)
        print("\nSUCCESS: All cells in the notebook executed without errors!")
    except Exception as e:
        # CellExecutionError carries the failing cell and traceback
        print(f"\nFAILURE: Notebook validation failed.\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    setup_logging()
    validate_notebook()
