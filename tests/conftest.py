"""Shared pytest configuration."""

from __future__ import annotations

from pathlib import Path

import pytest


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "smoke: fast checks of pure geometry code")
    config.addinivalue_line("markers", "integration: tests that read generated PDFs")
    config.addinivalue_line("markers", "requires_pdf: tests that need PyMuPDF to write PDFs")


@pytest.fixture
def pdf_fixtures(tmp_path: Path):
    """Fixture manager writing into a per-test directory."""
    from tests.pdf_fixtures import get_fixtures

    fixtures = get_fixtures(tmp_path / "pdfs")
    yield fixtures
    fixtures.cleanup_all()
