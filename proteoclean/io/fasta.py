"""
FASTA file handling utilities.
"""

from pathlib import Path
from typing import List, Sequence, Union

from pyopenms import FASTAEntry, FASTAFile

from proteoclean.core.logger import get_logger
from proteoclean.model.sequence import SequenceRecord

logger = get_logger("proteoclean.io.fasta")


def load_fasta(fasta_path: Union[str, Path]) -> List:
    """
    Load a FASTA file and return the list of protein entries.

    Parameters
    ----------
    fasta_path : str or Path
        Path to the FASTA file.

    Returns
    -------
    List
        List of pyOpenMS FASTA entries.
    """
    fasta_proteins = []
    FASTAFile().load(str(fasta_path), fasta_proteins)
    return fasta_proteins


def read_sequence_records(fasta_path: Union[str, Path]) -> List[SequenceRecord]:
    """
    Read a FASTA file into sequence records, keeping file order.

    Parameters
    ----------
    fasta_path : str or Path
        Path to the FASTA file.

    Returns
    -------
    List[SequenceRecord]
        One record per entry.
    """
    records = [
        SequenceRecord(
            identifier=entry.identifier,
            description=entry.description,
            sequence=entry.sequence,
        )
        for entry in load_fasta(fasta_path)
    ]
    logger.info("Read %d sequence records from %s", len(records), fasta_path)
    return records


def write_fasta(records: Sequence[SequenceRecord], fasta_path: Union[str, Path]) -> Path:
    """
    Write sequence records to a FASTA file.

    Parameters
    ----------
    records : Sequence[SequenceRecord]
        Records to store, in output order.
    fasta_path : str or Path
        Destination file; parent directories are created.

    Returns
    -------
    Path
        The written file.
    """
    fasta_path = Path(fasta_path)
    fasta_path.parent.mkdir(parents=True, exist_ok=True)

    entries = []
    for record in records:
        entry = FASTAEntry()
        entry.identifier = record.identifier
        entry.description = record.description
        entry.sequence = record.sequence
        entries.append(entry)

    FASTAFile().store(str(fasta_path), entries)
    logger.info("Wrote %d sequence records to %s", len(entries), fasta_path)
    return fasta_path
