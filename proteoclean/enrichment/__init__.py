"""
Gene-set enrichment service access for the proteoclean package.
"""

from proteoclean.enrichment.enrichr import EnrichrClient, run_enrichment

__all__ = ["EnrichrClient", "run_enrichment"]
