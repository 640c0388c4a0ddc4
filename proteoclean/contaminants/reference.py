"""
Download of the cRAP contaminant reference.

The cRAP identifiers are not stable across releases, so every download is
tagged with a release marker stored next to the FASTA file.
"""

import hashlib
import json
import os
import tempfile
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

import requests

from proteoclean.core.constants import CRAP_URL, REQUEST_TIMEOUT
from proteoclean.core.exceptions import ExternalServiceUnavailable
from proteoclean.core.logger import get_logger
from proteoclean.io.fasta import read_sequence_records

logger = get_logger("proteoclean.contaminants.reference")

RELEASE_SUFFIX = ".release.json"


@dataclass
class ReferenceRelease:
    """
    Provenance of a downloaded reference file.

    Attributes
    ----------
    path : str
        Local FASTA file.
    url : str
        Source URL.
    release : str
        Release marker of the source database.
    retrieved_at : str
        ISO timestamp of the download.
    md5 : str
        Checksum of the local file.
    n_records : int
        Number of sequence records in the file.
    """

    path: str
    url: str
    release: str
    retrieved_at: str
    md5: str
    n_records: int

    def to_dict(self) -> dict:
        return asdict(self)


def release_path(destination: Union[str, Path]) -> Path:
    """Sidecar file holding the release information of ``destination``."""
    destination = Path(destination)
    return destination.with_name(destination.name + RELEASE_SUFFIX)


def _compute_hash(path: Path) -> str:
    h = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(4096), b""):
            h.update(chunk)
    return h.hexdigest()


def is_reachable(url: str, session: Optional[requests.Session] = None) -> bool:
    """
    Probe a URL with a HEAD request.

    Returns
    -------
    bool
        True if the server answered with a non-error status.
    """
    session = session or requests.Session()
    try:
        response = session.head(url, allow_redirects=True, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        logger.warning("%s is not reachable: %s", url, e)
        return False
    if response.status_code >= 400:
        logger.warning("%s answered with HTTP %d", url, response.status_code)
        return False
    return True


def fetch_crap(
    destination: Union[str, Path],
    url: str = CRAP_URL,
    overwrite: bool = False,
    release: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> ReferenceRelease:
    """
    Download the cRAP FASTA file and tag it with its release.

    Parameters
    ----------
    destination : str or Path
        Local FASTA path.
    url : str, optional
        Source of the reference.
    overwrite : bool, optional
        Replace an existing local copy. If False and the file exists,
        ``FileExistsError`` is raised.
    release : str, optional
        Release marker. Defaults to the server's Last-Modified header, or
        the retrieval date when the server sends none.
    session : requests.Session, optional
        HTTP session to use.

    Returns
    -------
    ReferenceRelease
        Provenance record, also written to ``<destination>.release.json``.

    Raises
    ------
    ExternalServiceUnavailable
        If the source cannot be reached.
    FileExistsError
        If the destination exists and ``overwrite`` is False.
    """
    destination = Path(destination)
    if destination.exists() and not overwrite:
        raise FileExistsError(f"{destination} already exists; pass overwrite=True to replace it")

    session = session or requests.Session()
    if not is_reachable(url, session=session):
        raise ExternalServiceUnavailable(f"Contaminant reference source {url} is unavailable")

    destination.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Downloading %s -> %s", url, destination)

    try:
        with session.get(url, stream=True, timeout=REQUEST_TIMEOUT) as response:
            response.raise_for_status()
            last_modified = response.headers.get("Last-Modified")
            fd, tmp_name = tempfile.mkstemp(dir=destination.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "wb") as f:
                    for chunk in response.iter_content(chunk_size=8192):
                        f.write(chunk)
                os.replace(tmp_name, destination)
            except Exception:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
    except requests.RequestException as e:
        raise ExternalServiceUnavailable(f"Download of {url} failed: {e}") from e

    retrieved_at = datetime.now(timezone.utc)
    if release is None:
        release = last_modified or retrieved_at.strftime("%Y-%m-%d")

    info = ReferenceRelease(
        path=str(destination),
        url=url,
        release=release,
        retrieved_at=retrieved_at.isoformat(),
        md5=_compute_hash(destination),
        n_records=len(read_sequence_records(destination)),
    )
    with open(release_path(destination), "w") as f:
        json.dump(info.to_dict(), f, indent=2)

    logger.info("Stored %d records of release '%s' at %s", info.n_records, release, destination)
    return info


def read_release(destination: Union[str, Path]) -> ReferenceRelease:
    """
    Read the release information written by ``fetch_crap``.

    Raises
    ------
    FileNotFoundError
        If the reference has no release sidecar.
    """
    path = release_path(destination)
    if not path.exists():
        raise FileNotFoundError(f"No release information for {destination} ({path} missing)")
    with open(path, "r") as f:
        return ReferenceRelease(**json.load(f))
