"""
Client for the Enrichr gene-set enrichment web service.

The service is treated as a black box: submit a gene list, query one
library, receive ranked terms. Availability is probed before use and an
unreachable service short-circuits the enrichment step.
"""

import json
from typing import List, Optional, Sequence

import pandas as pd
import requests

from proteoclean.core.constants import ENRICHR_URL, DEFAULT_ENRICHR_LIBRARY, REQUEST_TIMEOUT
from proteoclean.core.exceptions import ExternalServiceUnavailable
from proteoclean.core.logger import get_logger

logger = get_logger("proteoclean.enrichment.enrichr")

# Order of the fields in each Enrichr result row
ENRICHR_COLUMNS = [
    "Rank",
    "Term",
    "P-value",
    "Z-score",
    "Combined Score",
    "Genes",
    "Adjusted P-value",
    "Old P-value",
    "Old Adjusted P-value",
]
RESULT_COLUMNS = ["Rank", "Term", "P-value", "Z-score", "Combined Score", "Genes", "Adjusted P-value"]


class EnrichrClient:
    """
    Minimal Enrichr API client.

    Parameters
    ----------
    base_url : str, optional
        Service root, e.g. https://maayanlab.cloud/Enrichr.
    session : requests.Session, optional
        HTTP session to use.
    """

    def __init__(self, base_url: str = ENRICHR_URL, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def is_available(self) -> bool:
        """Probe the service; True if it answers the dataset statistics endpoint."""
        try:
            response = self.session.get(f"{self.base_url}/datasetStatistics", timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            logger.warning("Enrichr is not reachable at %s: %s", self.base_url, e)
            return False
        if response.status_code != 200:
            logger.warning("Enrichr answered with HTTP %d", response.status_code)
            return False
        return True

    def add_list(self, genes: Sequence[str], description: str = "proteoclean") -> int:
        """
        Upload a gene list.

        Returns
        -------
        int
            The user list id used to query libraries.
        """
        payload = {
            "list": (None, "\n".join(genes)),
            "description": (None, description),
        }
        try:
            response = self.session.post(f"{self.base_url}/addList", files=payload, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, json.JSONDecodeError) as e:
            raise ExternalServiceUnavailable(f"Enrichr addList failed: {e}") from e
        logger.debug("Uploaded %d genes as list %s", len(genes), data.get("userListId"))
        return data["userListId"]

    def enrich(self, list_id: int, library: str = DEFAULT_ENRICHR_LIBRARY) -> pd.DataFrame:
        """
        Query one library for an uploaded list.

        Returns
        -------
        pd.DataFrame
            Terms ordered by rank, with overlapping genes joined by ';'.
        """
        params = {"userListId": list_id, "backgroundType": library}
        try:
            response = self.session.get(f"{self.base_url}/enrich", params=params, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, json.JSONDecodeError) as e:
            raise ExternalServiceUnavailable(f"Enrichr enrich failed: {e}") from e

        if library not in data:
            raise ExternalServiceUnavailable(f"Enrichr returned no results for library '{library}'")

        rows = [dict(zip(ENRICHR_COLUMNS, row)) for row in data[library]]
        result = pd.DataFrame(rows, columns=ENRICHR_COLUMNS)[RESULT_COLUMNS]
        result["Genes"] = result["Genes"].apply(
            lambda genes: ";".join(genes) if isinstance(genes, list) else genes
        )
        return result.sort_values("Rank").reset_index(drop=True)


def run_enrichment(
    genes: Sequence[str],
    library: str = DEFAULT_ENRICHR_LIBRARY,
    client: Optional[EnrichrClient] = None,
    description: str = "proteoclean",
) -> Optional[pd.DataFrame]:
    """
    Run an enrichment query if the service is up.

    Parameters
    ----------
    genes : Sequence[str]
        Gene symbols to test.
    library : str, optional
        Enrichr library name.
    client : EnrichrClient, optional
        Client to use; a default one is created otherwise.
    description : str, optional
        Label attached to the uploaded list.

    Returns
    -------
    pd.DataFrame or None
        Ranked terms, or None when the gene list is empty or the service is
        unavailable.
    """
    genes: List[str] = [g for g in dict.fromkeys(genes) if g]
    if not genes:
        logger.warning("Empty gene list, skipping enrichment")
        return None

    client = client or EnrichrClient()
    if not client.is_available():
        logger.warning("Enrichment service unavailable, skipping enrichment for %d genes", len(genes))
        return None

    try:
        list_id = client.add_list(genes, description=description)
        result = client.enrich(list_id, library=library)
    except ExternalServiceUnavailable as e:
        logger.warning("Enrichment skipped for %d genes: %s", len(genes), e)
        return None
    logger.info("%d enriched terms in %s for %d genes", len(result), library, len(genes))
    return result
