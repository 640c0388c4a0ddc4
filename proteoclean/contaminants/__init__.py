"""
Contaminant (cRAP) reference building for the proteoclean package.

This module downloads the cRAP reference, builds record sets from manual
accession lists and merges record sets without duplicating identifiers.
"""

from proteoclean.contaminants.reference import (
    ReferenceRelease,
    fetch_crap,
    read_release,
    release_path,
    is_reachable,
)
from proteoclean.contaminants.records import (
    DuplicatePolicy,
    append_records,
    build_from_accessions,
    contaminant_accessions,
    fetch_uniprot_sequences,
    validate_unique,
)

__all__ = [
    "ReferenceRelease",
    "fetch_crap",
    "read_release",
    "release_path",
    "is_reachable",
    "DuplicatePolicy",
    "append_records",
    "build_from_accessions",
    "contaminant_accessions",
    "fetch_uniprot_sequences",
    "validate_unique",
]
