"""
Shared pytest fixtures for IDN report ingestion tests.
"""
import pytest
from fastapi.testclient import TestClient

from main import app
from seed import seed_data
from idn_store import reset_processed_data

# Two findings, a wrapped brain-frequency list and a scan type marker
SAMPLE_IDN_REPORT = """IDN Scan Export
Rheumatoid Arthritis ++  Date : 2024-03-01  Time : 10:15
Resonance (45%) Scale: 12
Real Instruction Freq. (120.5, 340.2, 88)
Brain Instruction Freq. (7.83, 14.1,
22.5)
Felty Syndrome ++  Date : 2024-03-01  Time : 10:17
Resonance (55.5%) Scale: 8
Real Instruction Freq. (60, 61)
Brain Instruction
Freq. (3.5, 4.5)
Scantype: 3
"""


@pytest.fixture
def client():
    """FastAPI TestClient."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def seeded_data():
    """
    Reset to seed data: clients c1, c2, c3 with no processed IDN data.
    Catalog: Lower Digestive Tract, Colitis, Autoimmune Joint, Spinal Inflammation, Gut Motility.
    """
    seed_data()
    reset_processed_data()
    yield
    reset_processed_data()


@pytest.fixture
def sample_report_text():
    return SAMPLE_IDN_REPORT


@pytest.fixture
def report_file(tmp_path):
    """Write report text to a file under tmp_path and return its path."""
    def _write(content, name="idn-report.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write
