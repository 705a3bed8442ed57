"""Shared test fixtures for copy-to-llm."""

from pathlib import Path

import pytest

# Get the fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"
PAGES_DIR = FIXTURES_DIR / "pages"

LOCAL_URL = "http://localhost:3000/projects"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def local_url() -> str:
    """Return a development server URL."""
    return LOCAL_URL


@pytest.fixture
def name_error_page() -> str:
    """Load the rendered text of a view NameError page."""
    return (PAGES_DIR / "name_error.txt").read_text()


@pytest.fixture
def missing_template_page() -> str:
    """Load the rendered text of a MissingTemplate page."""
    return (PAGES_DIR / "missing_template.txt").read_text()


@pytest.fixture
def controller_error_page() -> str:
    """Load the rendered text of a controller error page (no view banner)."""
    return (PAGES_DIR / "controller_error.txt").read_text()


@pytest.fixture
def article_html() -> str:
    """Load an ordinary HTML page with a <main> landmark."""
    return (PAGES_DIR / "article.html").read_text()
