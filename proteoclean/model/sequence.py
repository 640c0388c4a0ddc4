"""
Sequence record model used by the contaminant reference builder.
"""

from dataclasses import dataclass

from proteoclean.core.constants import get_accession


@dataclass(frozen=True)
class SequenceRecord:
    """
    One FASTA entry.

    Attributes
    ----------
    identifier : str
        Header token up to the first whitespace (e.g. 'sp|P00761|TRYP_PIG').
    description : str
        Remainder of the header line.
    sequence : str
        Amino acid sequence; may be empty for placeholder records.
    """

    identifier: str
    description: str = ""
    sequence: str = ""

    @property
    def accession(self) -> str:
        """Accession part of the identifier ('P00761' for 'sp|P00761|TRYP_PIG')."""
        return get_accession(self.identifier)
