"""
Shared fixtures for the test suite.
"""

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest
import requests


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def fasta_file(tmp_path):
    path = tmp_path / "example.fasta"
    path.write_text(
        ">seq1 coding example\n"
        "ATGGCCATTGTAATGGGCCGC\n"
        "TGAAAGGGTGCCCGATAG\n"
        ">seq2 short gc run\n"
        "GGCC\n"
    )
    return path


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, text='', status_code=200):
        self.text = text
        self.status_code = status_code
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({'url': url, 'params': params, 'timeout': timeout})
        return FakeResponse(self.text, self.status_code)


@pytest.fixture
def fake_session():
    return FakeSession
