"""
Sequences Module

Biopython operations for the bioinformatics stop of the tour:
- FASTA parsing
- Subsequence extraction
- Transcription (DNA -> RNA) and translation (-> protein)
- Pairwise alignment distance under a simple cost model
"""

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd
from Bio import SeqIO
from Bio.Align import PairwiseAligner
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord
from Bio.SeqUtils import gc_fraction


logger = logging.getLogger(__name__)

SequenceLike = Union[str, Seq, SeqRecord]


def _as_seq(sequence: SequenceLike) -> Seq:
    if isinstance(sequence, SeqRecord):
        return sequence.seq
    if isinstance(sequence, Seq):
        return sequence
    if isinstance(sequence, str):
        return Seq(sequence.upper())
    raise TypeError(f"Expected str, Seq or SeqRecord, got {type(sequence).__name__}")


def load_fasta(filepath: Union[str, Path]) -> List[SeqRecord]:
    """
    Load all records from a FASTA file.

    Parameters
    ----------
    filepath : str or Path
        Path to the FASTA file

    Returns
    -------
    list of SeqRecord
        Records in file order

    Example
    -------
    >>> records = load_fasta('data/raw/ins_mrna.fasta')
    >>> print(records[0].id)
    NM_000207.3
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"No FASTA file found at {filepath}")

    records = list(SeqIO.parse(str(filepath), "fasta"))
    if not records:
        raise ValueError(f"No FASTA records in {filepath}")

    logger.info("Loaded %d record(s) from %s", len(records), filepath)
    return records


def extract_subsequence(sequence: SequenceLike, start: int, end: int) -> Seq:
    """
    Slice ``sequence[start:end]`` (0-based, end exclusive).

    Unlike plain slicing, bounds outside the sequence are rejected instead
    of being silently clipped.
    """
    seq = _as_seq(sequence)
    if not 0 <= start <= end <= len(seq):
        raise ValueError(
            f"Invalid bounds [{start}, {end}) for sequence of length {len(seq)}"
        )
    return seq[start:end]


def transcribe(dna: SequenceLike) -> Seq:
    """DNA coding strand -> messenger RNA (T -> U)."""
    return _as_seq(dna).transcribe()


def translate(sequence: SequenceLike, to_stop: bool = False, table: int = 1) -> Seq:
    """
    Translate DNA or RNA into protein.

    A trailing partial codon is dropped before translation.

    Parameters
    ----------
    sequence : str, Seq or SeqRecord
        Nucleotide sequence
    to_stop : bool
        Stop at the first stop codon instead of emitting '*'
    table : int
        NCBI genetic code table id
    """
    seq = _as_seq(sequence)
    seq = seq[: len(seq) - len(seq) % 3]
    return seq.translate(table=table, to_stop=to_stop)


def _make_aligner(match: float, mismatch: float, gap: float) -> PairwiseAligner:
    aligner = PairwiseAligner()
    aligner.mode = 'global'
    aligner.match_score = match
    aligner.mismatch_score = mismatch
    aligner.open_gap_score = gap
    aligner.extend_gap_score = gap
    return aligner


def alignment_distance(
    a: SequenceLike,
    b: SequenceLike,
    match: float = 0,
    mismatch: float = -1,
    gap: float = -1
) -> int:
    """
    Distance between two sequences from an optimal global alignment.

    The distance is the negated alignment score. With the default costs
    (match 0, mismatch -1, gap -1) that is the edit (Levenshtein) distance.

    Example
    -------
    >>> alignment_distance("KITTEN", "SITTING")
    3
    """
    seq_a, seq_b = _as_seq(a), _as_seq(b)

    # the aligner refuses empty sequences
    if len(seq_a) == 0 or len(seq_b) == 0:
        return int(round(-gap * max(len(seq_a), len(seq_b))))

    score = _make_aligner(match, mismatch, gap).score(seq_a, seq_b)
    return int(round(-score))


def best_alignment(
    a: SequenceLike,
    b: SequenceLike,
    match: float = 0,
    mismatch: float = -1,
    gap: float = -1
) -> str:
    """Printable form of one optimal global alignment."""
    alignments = _make_aligner(match, mismatch, gap).align(_as_seq(a), _as_seq(b))
    return str(alignments[0])


def gc_content(sequence: SequenceLike) -> float:
    """Fraction of G and C bases (0-1)."""
    return float(gc_fraction(_as_seq(sequence)))


def summarize_records(records: List[SeqRecord]) -> pd.DataFrame:
    """
    Tabulate id, description, length and GC content per record.

    Returns
    -------
    pd.DataFrame
        One row per record
    """
    rows = [
        {
            'id': record.id,
            'description': record.description,
            'length': len(record.seq),
            'gc_content': gc_content(record),
        }
        for record in records
    ]
    return pd.DataFrame(rows, columns=['id', 'description', 'length', 'gc_content'])
