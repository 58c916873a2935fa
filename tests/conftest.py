"""Pytest configuration and fixtures."""

import pytest

from cidzor.db import create_database
from cidzor.game.cards import parse_cards


@pytest.fixture
def cards():
    """Parse a card string, e.g. cards('As Kh') or cards('AsKh')."""
    return parse_cards


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary article database for testing."""
    db_path = tmp_path / "articles.db"
    conn = create_database(db_path)
    yield conn, db_path
    conn.close()
