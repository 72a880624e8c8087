"""Pytest configuration and fixtures."""
import shutil
from pathlib import Path

import pytest

from homepage_data.config import SiteConfig

FIXTURES = Path(__file__).parent / "fixtures"


def read_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def bibtex_text() -> str:
    return read_fixture("publications.bib")


@pytest.fixture
def key_value_text() -> str:
    return read_fixture("publications.txt")


@pytest.fixture
def teaching_text() -> str:
    return read_fixture("teaching.txt")


@pytest.fixture
def site_dir(tmp_path) -> Path:
    """A site checkout: index.html plus data/publications.bib and data/teaching.txt."""
    shutil.copy(FIXTURES / "index.html", tmp_path / "index.html")
    data = tmp_path / "data"
    data.mkdir()
    shutil.copy(FIXTURES / "publications.bib", data / "publications.bib")
    shutil.copy(FIXTURES / "teaching.txt", data / "teaching.txt")
    return tmp_path


@pytest.fixture
def site_config(site_dir) -> SiteConfig:
    return SiteConfig(page=str(site_dir / "index.html"), base_url=None)
