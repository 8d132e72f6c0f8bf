"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import random

import pytest


@pytest.fixture
def known_codes():
    """Fixture providing a small set of issued codes."""
    return [
        "PL-7A9-K2M",
        "PL-QA9-K2M",
        "PL-HJK-4RT",
        "PL-XY3-C6V",
    ]


@pytest.fixture
def seeded_rng():
    """Fixture providing a reproducible random source."""
    return random.Random(1234)


@pytest.fixture
def codes_file(tmp_path, known_codes):
    """Fixture writing the known codes to a newline-separated file."""
    path = tmp_path / "codes.txt"
    path.write_text(
        "# issued codes\n" + "\n".join(known_codes) + "\n\n",
        encoding="utf-8",
    )
    return path
