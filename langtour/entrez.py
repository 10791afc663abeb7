"""
Entrez Module

Lookups against the NCBI E-utilities web service:
- esearch: term -> record ids
- efetch: ids -> XML (or FASTA) records
- Field extraction from the returned XML
"""

import time
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Union

import requests

from langtour.config import (
    EUTILS_BASE_URL,
    NCBI_API_KEY,
    NCBI_EMAIL,
    NCBI_TOOL,
    REQUEST_TIMEOUT,
)


logger = logging.getLogger(__name__)

# ElementTree paths into an NCBI Gene XML record
GENE_FIELDS = {
    'symbol': './/Entrezgene_gene/Gene-ref/Gene-ref_locus',
    'description': './/Entrezgene_gene/Gene-ref/Gene-ref_desc',
    'map_location': './/Entrezgene_gene/Gene-ref/Gene-ref_maploc',
    'organism': './/Entrezgene_source/BioSource/BioSource_org/Org-ref/Org-ref_taxname',
    'summary': './/Entrezgene_summary',
}

# NCBI allows 3 requests per second, or 10 with an API key
REQUESTS_PER_SECOND = 3
REQUESTS_PER_SECOND_WITH_KEY = 10

_last_request = 0.0


def _base_params() -> dict:
    params = {'tool': NCBI_TOOL}
    if NCBI_EMAIL:
        params['email'] = NCBI_EMAIL
    if NCBI_API_KEY:
        params['api_key'] = NCBI_API_KEY
    return params


def _throttle() -> None:
    """Sleep just long enough to stay under the NCBI request rate."""
    global _last_request
    rate = REQUESTS_PER_SECOND_WITH_KEY if NCBI_API_KEY else REQUESTS_PER_SECOND
    wait = _last_request + 1.0 / rate - time.monotonic()
    if wait > 0:
        logger.debug("Throttling E-utilities request for %.3f s", wait)
        time.sleep(wait)
    _last_request = time.monotonic()


def _get(endpoint: str, params: dict, session: Optional[requests.Session] = None) -> requests.Response:
    """
    GET an E-utilities endpoint; HTTP errors are raised, not swallowed.

    Calls are spaced to at most 3 per second (10 with ``NCBI_API_KEY``).
    """
    http = session if session is not None else requests
    _throttle()
    url = f"{EUTILS_BASE_URL}/{endpoint}"
    logger.debug("GET %s %s", url, params)

    response = http.get(url, params={**_base_params(), **params}, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response


def _join_ids(ids: Union[str, List[str]]) -> str:
    if isinstance(ids, str):
        return ids
    return ",".join(str(i) for i in ids)


def fetch_xml(
    db: str,
    ids: Union[str, List[str]],
    session: Optional[requests.Session] = None,
    **params
) -> str:
    """
    Fetch records as XML with efetch.

    Parameters
    ----------
    db : str
        Entrez database, e.g. 'gene', 'nuccore', 'protein'
    ids : str or list
        One id or several
    session : requests.Session, optional
        Session to reuse (defaults to module-level ``requests``)
    **params
        Extra efetch parameters

    Returns
    -------
    str
        Raw XML document

    Example
    -------
    >>> xml_text = fetch_xml('gene', '3630')
    >>> parse_fields(xml_text, GENE_FIELDS)['symbol']
    'INS'
    """
    query = {'db': db, 'id': _join_ids(ids), 'retmode': 'xml', **params}
    return _get('efetch.fcgi', query, session).text


def search(
    db: str,
    term: str,
    retmax: int = 20,
    session: Optional[requests.Session] = None
) -> List[str]:
    """
    Search a database and return matching record ids.

    Example
    -------
    >>> search('gene', 'INS[sym] AND human[orgn]')
    ['3630', ...]
    """
    response = _get('esearch.fcgi', {'db': db, 'term': term, 'retmax': retmax}, session)
    root = ET.fromstring(response.text)
    return [el.text for el in root.findall('./IdList/Id') if el.text]


def fetch_fasta(
    accession: str,
    output_path: Union[str, Path],
    db: str = 'nuccore',
    session: Optional[requests.Session] = None
) -> Path:
    """
    Download a record in FASTA format and write it to ``output_path``.

    Returns
    -------
    Path
        Path of the written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    response = _get(
        'efetch.fcgi',
        {'db': db, 'id': accession, 'rettype': 'fasta', 'retmode': 'text'},
        session
    )
    output_path.write_text(response.text, encoding='utf-8')

    logger.info("Saved %s to %s", accession, output_path)
    return output_path


def parse_fields(xml_text: str, fields: Dict[str, str]) -> Dict[str, Optional[str]]:
    """
    Pull named fields out of an XML document.

    Parameters
    ----------
    xml_text : str
        XML document
    fields : dict
        Output name -> ElementTree path (relative to the root element)

    Returns
    -------
    dict
        Output name -> stripped text, or None when the path matches nothing
    """
    root = ET.fromstring(xml_text)

    result = {}
    for name, path in fields.items():
        element = root.find(path)
        if element is None or element.text is None:
            result[name] = None
        else:
            result[name] = element.text.strip()
    return result


def lookup_gene(gene_id: str, session: Optional[requests.Session] = None) -> Dict[str, Optional[str]]:
    """
    Fetch an NCBI Gene record and extract ``GENE_FIELDS``.

    Returns
    -------
    dict
        Keys 'gene_id' plus every key of ``GENE_FIELDS``
    """
    xml_text = fetch_xml('gene', gene_id, session=session)
    record = {'gene_id': str(gene_id)}
    record.update(parse_fields(xml_text, GENE_FIELDS))

    logger.info("Gene %s: %s (%s)", gene_id, record['symbol'], record['organism'])
    return record
