"""
Constants and common utilities for the proteoclean package.

This module defines column names, remote endpoints, and utility functions
used throughout the package for loading, cleaning and exporting tables.
"""

# Column name constants (DIA-NN protein group report)
RUN = "Run"
PROTEIN_GROUP = "Protein.Group"
PROTEIN_NAMES = "Protein.Names"
GENES = "Genes"
ABUNDANCE = "PG.MaxLFQ"
Q_VALUE = "PG.Q.Value"
LOG2_ABUNDANCE = "Log2.PG.MaxLFQ"

# Annotation (sample sheet) columns
BIOREPLICATE = "BioReplicate"
CONDITION = "Condition"
OUTLIER = "Outlier"

ANNOTATION_COLUMNS = [RUN, BIOREPLICATE, CONDITION, OUTLIER]

MULTI_VALUE_SEPARATOR = ";"

# Default q-value cutoffs compared side by side
DEFAULT_CUTOFFS = (0.01, 0.05)

# Default calibration standard pattern (Biognosys iRT kit)
IRT_PATTERN = "iRT"

# Accepted spellings of boolean flags in sample sheets
TRUE_VALUES = {"true", "t", "yes", "y", "1"}
FALSE_VALUES = {"false", "f", "no", "n", "0", ""}

# Table formats understood by the loader, keyed by file suffix
TABLE_FORMATS = {
    ".csv": "csv",
    ".tsv": "tsv",
    ".txt": "tsv",
    ".xlsx": "excel",
    ".xls": "excel",
    ".parquet": "parquet",
}

# Remote resources
CRAP_URL = "https://ftp.thegpm.org/fasta/cRAP/crap.fasta"
UNIPROT_STREAM_URL = "https://rest.uniprot.org/uniprotkb/stream"
ENRICHR_URL = "https://maayanlab.cloud/Enrichr"
DEFAULT_ENRICHR_LIBRARY = "GO_Biological_Process_2023"
REQUEST_TIMEOUT = 30


def get_accession(identifier: str) -> str:
    """
    Get protein accession from the identifier (e.g. sp|P12345|PROT_NAME).

    Parameters
    ----------
    identifier : str
        Protein identifier.

    Returns
    -------
    str
        Protein accession.
    """
    identifier_lst = identifier.split("|")
    if len(identifier_lst) == 1:
        return identifier_lst[0]
    else:
        return identifier_lst[1]


def format_cutoff(cutoff: float) -> str:
    """Name a result table after its q-value cutoff (0.01 -> 'q0.01')."""
    return f"q{cutoff:g}"
