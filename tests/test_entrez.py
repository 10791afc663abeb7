"""
Unit tests for the Entrez lookups. No network access: every request goes
through a fake session.
"""

import xml.etree.ElementTree as ET

import pytest
import requests

from langtour import entrez
from langtour.config import EUTILS_BASE_URL, NCBI_TOOL, REQUEST_TIMEOUT

GENE_XML = """<?xml version="1.0" ?>
<Entrezgene-Set>
  <Entrezgene>
    <Entrezgene_source>
      <BioSource>
        <BioSource_org>
          <Org-ref>
            <Org-ref_taxname>Homo sapiens</Org-ref_taxname>
          </Org-ref>
        </BioSource_org>
      </BioSource>
    </Entrezgene_source>
    <Entrezgene_gene>
      <Gene-ref>
        <Gene-ref_locus>INS</Gene-ref_locus>
        <Gene-ref_desc>insulin</Gene-ref_desc>
        <Gene-ref_maploc>11p15.5</Gene-ref_maploc>
      </Gene-ref>
    </Entrezgene_gene>
    <Entrezgene_summary>
      This gene encodes insulin.
    </Entrezgene_summary>
  </Entrezgene>
</Entrezgene-Set>
"""

SEARCH_XML = """<?xml version="1.0" ?>
<eSearchResult>
  <Count>2</Count>
  <IdList>
    <Id>3630</Id>
    <Id>16334</Id>
  </IdList>
</eSearchResult>
"""


class FakeClock:
    """Replaces the time module inside entrez; sleeping advances the clock."""

    def __init__(self, now=1000.0):
        self.now = now
        self.sleeps = []

    def monotonic(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def clock(monkeypatch):
    fake = FakeClock()
    monkeypatch.setattr(entrez, 'time', fake)
    monkeypatch.setattr(entrez, '_last_request', 0.0)
    return fake


class TestParseFields:
    """Test cases for XML field extraction."""

    def test_gene_fields(self):
        fields = entrez.parse_fields(GENE_XML, entrez.GENE_FIELDS)
        assert fields == {
            'symbol': 'INS',
            'description': 'insulin',
            'map_location': '11p15.5',
            'organism': 'Homo sapiens',
            'summary': 'This gene encodes insulin.',
        }

    def test_missing_path_is_none(self):
        fields = entrez.parse_fields(GENE_XML, {'absent': './/Nothing-here'})
        assert fields == {'absent': None}

    def test_malformed_xml(self):
        with pytest.raises(ET.ParseError):
            entrez.parse_fields("<Entrezgene-Set><oops>", entrez.GENE_FIELDS)


class TestRequests:
    """Test cases for the HTTP layer."""

    def test_fetch_xml_params(self, fake_session):
        session = fake_session(GENE_XML)
        text = entrez.fetch_xml('gene', ['3630', '16334'], session=session)

        assert text == GENE_XML
        call = session.calls[0]
        assert call['url'] == f"{EUTILS_BASE_URL}/efetch.fcgi"
        assert call['params']['db'] == 'gene'
        assert call['params']['id'] == '3630,16334'
        assert call['params']['retmode'] == 'xml'
        assert call['params']['tool'] == NCBI_TOOL
        assert call['timeout'] == REQUEST_TIMEOUT

    def test_http_error_propagates(self, fake_session):
        session = fake_session('', status_code=500)
        with pytest.raises(requests.HTTPError):
            entrez.fetch_xml('gene', '3630', session=session)

    def test_search(self, fake_session):
        session = fake_session(SEARCH_XML)
        ids = entrez.search('gene', 'INS[sym]', retmax=5, session=session)
        assert ids == ['3630', '16334']
        assert session.calls[0]['url'].endswith('esearch.fcgi')
        assert session.calls[0]['params']['retmax'] == 5

    def test_fetch_fasta_writes_file(self, fake_session, tmp_path):
        session = fake_session(">NM_000207.3 insulin\nAGCCCTCCAGGACAGGCTGCATCAGAAGAGGCCATCAAGC\n")
        out = entrez.fetch_fasta('NM_000207.3', tmp_path / 'sub' / 'ins.fasta', session=session)

        assert out.exists()
        assert out.read_text().startswith('>NM_000207.3')
        assert session.calls[0]['params']['rettype'] == 'fasta'

    def test_module_requests_used_without_session(self, monkeypatch, fake_session):
        session = fake_session(GENE_XML)
        monkeypatch.setattr(entrez.requests, 'get', session.get)
        assert entrez.fetch_xml('gene', '3630') == GENE_XML

    def test_email_and_api_key_sent_when_configured(self, monkeypatch, fake_session):
        monkeypatch.setattr(entrez, 'NCBI_EMAIL', 'reader@example.org')
        monkeypatch.setattr(entrez, 'NCBI_API_KEY', 'secret')
        session = fake_session(GENE_XML)
        entrez.fetch_xml('gene', '3630', session=session)

        params = session.calls[0]['params']
        assert params['email'] == 'reader@example.org'
        assert params['api_key'] == 'secret'


class TestLookupGene:
    """Test cases for the end-to-end gene lookup."""

    def test_lookup(self, fake_session):
        record = entrez.lookup_gene('3630', session=fake_session(GENE_XML))
        assert record['gene_id'] == '3630'
        assert record['symbol'] == 'INS'
        assert record['organism'] == 'Homo sapiens'


class TestThrottle:
    """Test cases for spacing requests under the NCBI rate limit."""

    def test_first_request_not_delayed(self, fake_session, clock):
        entrez.fetch_xml('gene', '3630', session=fake_session(GENE_XML))
        assert clock.sleeps == []

    def test_back_to_back_requests_spaced(self, fake_session, clock):
        session = fake_session(GENE_XML)
        entrez.fetch_xml('gene', '3630', session=session)
        entrez.search('gene', 'INS[sym]', session=fake_session(SEARCH_XML))
        entrez.fetch_xml('gene', '3630', session=session)

        assert clock.sleeps == pytest.approx([1 / 3, 1 / 3])

    def test_api_key_allows_faster_rate(self, monkeypatch, fake_session, clock):
        monkeypatch.setattr(entrez, 'NCBI_API_KEY', 'secret')
        session = fake_session(GENE_XML)
        entrez.fetch_xml('gene', '3630', session=session)
        entrez.fetch_xml('gene', '3630', session=session)

        assert clock.sleeps == pytest.approx([0.1])

    def test_no_delay_after_idle_period(self, fake_session, clock):
        session = fake_session(GENE_XML)
        entrez.fetch_xml('gene', '3630', session=session)
        clock.now += 1.0
        entrez.fetch_xml('gene', '3630', session=session)
        assert clock.sleeps == []

    def test_failed_request_still_counts(self, fake_session, clock):
        with pytest.raises(requests.HTTPError):
            entrez.fetch_xml('gene', '3630', session=fake_session('', status_code=429))
        entrez.fetch_xml('gene', '3630', session=fake_session(GENE_XML))
        assert len(clock.sleeps) == 1
