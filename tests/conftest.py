"""
Pytest configuration and fixtures for proofcheck tests.
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Return path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def sample_config(fixtures_dir):
    """Return a CheckConfig pointing at the fixture data files."""
    from proofcheck import CheckConfig

    return CheckConfig(
        dictionary_path=fixtures_dir / "words.txt",
        good_words_path=fixtures_dir / "good_words.txt",
        hebe_path=fixtures_dir / "hebelist.txt",
    )


@pytest.fixture
def small_dictionary():
    """Dictionary for the clond/cloud scenario."""
    from proofcheck.spelling import Dictionary

    return Dictionary.from_words(["cloud", "house", "the", "a", "hung", "over"])
