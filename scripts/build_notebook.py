import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from langtour import config
from langtour.notebook import write_notebook


if __name__ == "__main__":
    nb_path = Path(sys.argv[1]) if len(sys.argv) > 1 else config.NOTEBOOK_PATH
    write_notebook(nb_path)
    print(f"Notebook written: {nb_path}")
