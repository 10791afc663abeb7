"""
Automated Data Download Script

Downloads the example data used by the tour notebook:
- Example nucleotide record (FASTA) from NCBI nuccore
- Example gene record (XML) from NCBI gene

No API key required. Set LANGTOUR_NCBI_EMAIL to identify yourself to NCBI.
"""

import sys
from pathlib import Path
from typing import List, Optional

import requests

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from langtour import config, entrez
from langtour.logging_config import setup_logging


def download_fasta(
    accessions: List[str] = [config.EXAMPLE_ACCESSION],
    output_dir: Path = config.RAW_DIR,
    session: Optional[requests.Session] = None
) -> List[Path]:
    """
    Download nucleotide records as FASTA.

    Parameters
    ----------
    accessions : list
        GenBank / RefSeq accessions
    output_dir : Path
        Output directory

    Returns
    -------
    list
        Paths to downloaded files
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    downloaded = []

    for accession in accessions:
        if accession == config.EXAMPLE_ACCESSION:
            output_path = config.EXAMPLE_FASTA
        else:
            output_path = output_dir / f"{accession.replace('.', '_')}.fasta"

        if output_path.exists():
            print(f"Already exists: {output_path}")
            downloaded.append(output_path)
            continue

        try:
            print(f"Downloading: {accession}")
            downloaded.append(entrez.fetch_fasta(accession, output_path, session=session))
            print(f"  Saved: {output_path}")
        except requests.RequestException as e:
            print(f"  Error: {e}")

    return downloaded


def download_gene_xml(
    gene_id: str = config.EXAMPLE_GENE_ID,
    output_dir: Path = config.RAW_DIR,
    session: Optional[requests.Session] = None
) -> Optional[Path]:
    """Save the raw NCBI Gene XML for offline inspection."""
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / f"gene_{gene_id}.xml"

    if output_path.exists():
        print(f"Already exists: {output_path}")
        return output_path

    try:
        print(f"Querying NCBI gene {gene_id}...")
        xml_text = entrez.fetch_xml('gene', gene_id, session=session)
        output_path.write_text(xml_text, encoding='utf-8')
        print(f"  Saved: {output_path}")
        return output_path
    except requests.RequestException as e:
        print(f"  Error: {e}")
        return None


def download_all():
    """Download every dataset the notebook reads."""
    print("=" * 60)
    print("AUTOMATED DATA DOWNLOAD - Language Tour")
    print("=" * 60)

    print("\n1. Creating directories...")
    config.create_directories()

    print("\n2. Downloading example FASTA...")
    fasta_files = download_fasta()
    print(f"   Downloaded {len(fasta_files)} FASTA file(s)")

    print("\n3. Downloading example gene record...")
    download_gene_xml()

    print("\n" + "=" * 60)
    print("DOWNLOAD COMPLETE!")
    print("=" * 60)
    print("\nNext steps:")
    print("1. Run scripts/build_notebook.py")
    print("2. Open notebooks/language_tour.ipynb")


if __name__ == "__main__":
    setup_logging()
    download_all()
