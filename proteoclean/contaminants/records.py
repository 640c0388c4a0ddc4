"""
Construction and merging of contaminant sequence record sets.
"""

import os
import tempfile
from collections import Counter
from enum import Enum, auto
from typing import Dict, Iterable, List, Optional, Sequence, Set, Union

import requests

from proteoclean.core.constants import UNIPROT_STREAM_URL, REQUEST_TIMEOUT
from proteoclean.core.exceptions import DuplicateIdentifierError, ExternalServiceUnavailable
from proteoclean.core.logger import get_logger
from proteoclean.io.fasta import read_sequence_records
from proteoclean.model.sequence import SequenceRecord

logger = get_logger("proteoclean.contaminants.records")


class DuplicatePolicy(Enum):
    """What to do when two record sets share an identifier."""

    FIRST_WINS = auto()  # Keep the record already present, skip the newcomer
    REJECT = auto()  # Raise DuplicateIdentifierError

    @classmethod
    def from_str(cls, name: str) -> "DuplicatePolicy":
        """Convert string to enum value (case-insensitive)."""
        name_ = name.lower().replace("-", "_").replace(" ", "_")
        for k, v in cls._member_map_.items():
            if k.lower() == name_:
                return v
        raise KeyError(f"Unknown duplicate policy: {name}")


def _duplicates(identifiers: Iterable[str]) -> List[str]:
    return sorted(k for k, n in Counter(identifiers).items() if n > 1)


def validate_unique(records: Sequence[SequenceRecord], label: str = "record set") -> None:
    """
    Check that identifiers are unique within one record set.

    Raises
    ------
    DuplicateIdentifierError
        Listing the repeated identifiers.
    """
    duplicated = _duplicates(r.accession for r in records)
    if duplicated:
        raise DuplicateIdentifierError(
            f"{label} contains duplicate identifiers: {duplicated}", identifiers=duplicated
        )


def append_records(
    base: Sequence[SequenceRecord],
    extra: Sequence[SequenceRecord],
    on_duplicate: Union[str, DuplicatePolicy] = DuplicatePolicy.FIRST_WINS,
) -> List[SequenceRecord]:
    """
    Append ``extra`` to ``base`` without duplicating identifiers.

    Records are identified by accession, so "P00761" and "sp|P00761|TRYP_PIG"
    count as the same entry.

    Parameters
    ----------
    base : Sequence[SequenceRecord]
        Existing records; their order is preserved.
    extra : Sequence[SequenceRecord]
        Records to append, in order.
    on_duplicate : str or DuplicatePolicy, optional
        'first_wins' keeps the base record and skips the newcomer;
        'reject' raises on any shared identifier.

    Returns
    -------
    List[SequenceRecord]
        Combined record set.

    Raises
    ------
    DuplicateIdentifierError
        If either input repeats an identifier, or on a shared identifier
        under the 'reject' policy.
    """
    if isinstance(on_duplicate, str):
        on_duplicate = DuplicatePolicy.from_str(on_duplicate)

    validate_unique(base, "base record set")
    validate_unique(extra, "appended record set")

    present = {r.accession for r in base}
    shared = [r.accession for r in extra if r.accession in present]

    if shared and on_duplicate == DuplicatePolicy.REJECT:
        raise DuplicateIdentifierError(
            f"{len(shared)} identifier(s) already present: {shared}", identifiers=shared
        )

    combined = list(base) + [r for r in extra if r.accession not in present]
    if shared:
        logger.info("Kept existing records for %d shared identifier(s): %s", len(shared), shared)
    logger.info("Appended %d of %d records (%d total)", len(extra) - len(shared), len(extra), len(combined))
    return combined


def contaminant_accessions(records: Iterable[SequenceRecord]) -> Set[str]:
    """Accessions of a record set ('sp|P00761|TRYP_PIG' -> 'P00761')."""
    return {r.accession for r in records}


def fetch_uniprot_sequences(
    accessions: Sequence[str],
    session: Optional[requests.Session] = None,
    url: str = UNIPROT_STREAM_URL,
) -> Dict[str, SequenceRecord]:
    """
    Retrieve canonical sequences for accessions from the UniProt REST API.

    Returns
    -------
    Dict[str, SequenceRecord]
        Records keyed by accession; accessions UniProt did not return are absent.

    Raises
    ------
    ExternalServiceUnavailable
        If the request fails.
    """
    if not accessions:
        return {}
    session = session or requests.Session()
    query = " OR ".join(f"accession:{a}" for a in accessions)
    params = {"query": query, "format": "fasta", "includeIsoform": "false"}
    try:
        response = session.get(url, params=params, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ExternalServiceUnavailable(f"UniProt request failed: {e}") from e

    fd, tmp_name = tempfile.mkstemp(suffix=".fasta")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(response.text)
        records = read_sequence_records(tmp_name)
    finally:
        os.remove(tmp_name)

    return {r.accession: r for r in records}


def build_from_accessions(
    accessions: Iterable[str],
    fetch: bool = False,
    session: Optional[requests.Session] = None,
) -> List[SequenceRecord]:
    """
    Build a minimal record set holding only the given accessions.

    Parameters
    ----------
    accessions : Iterable[str]
        Accessions, in output order; repeats are collapsed.
    fetch : bool, optional
        Retrieve sequences from UniProt. Without fetching, or for accessions
        UniProt does not return, records carry an empty placeholder sequence.
    session : requests.Session, optional
        HTTP session used when fetching.

    Returns
    -------
    List[SequenceRecord]
        One record per unique accession.
    """
    unique = list(dict.fromkeys(a.strip() for a in accessions if a and a.strip()))
    fetched = fetch_uniprot_sequences(unique, session=session) if fetch else {}

    records = []
    for accession in unique:
        if accession in fetched:
            records.append(fetched[accession])
        else:
            records.append(SequenceRecord(identifier=accession, description="manual contaminant entry"))

    missing = [a for a in unique if a not in fetched]
    if fetch and missing:
        logger.warning("No sequence returned for %d accession(s): %s", len(missing), missing)
    logger.info("Built %d contaminant records", len(records))
    return records
