"""Pytest configuration and fixtures for test suite.

This is the root-level conftest.py that provides:
- Python path setup (so we can import gearpack without installing it)
- Basic environment variable defaults
- Shared catalog fixtures for all tests
"""
import os
import sys
from pathlib import Path
import pytest

# Add project root to Python path so we can import from gearpack
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ.setdefault("LOG_LEVEL", "INFO")

from gearpack.models import CatalogEntry  # noqa: E402


@pytest.fixture
def camera_body():
    return CatalogEntry(id="cam1", name="Sony A7IV Body", brand="Sony")


@pytest.fixture
def shotgun_mic():
    return CatalogEntry(id="aud1", name="Shotgun Mic", tags=["interview"])


@pytest.fixture
def sample_catalog(camera_body, shotgun_mic):
    """A small catalog with no Canon gear."""
    return [
        camera_body,
        shotgun_mic,
        CatalogEntry(id="lens1", name="24-70mm f/2.8 GM", brand="Sony"),
        CatalogEntry(id="light1", name="Aputure 300d", tags=["lighting", "cob"]),
        CatalogEntry(id="tri1", name="Carbon Tripod", brand="Peak Design"),
        CatalogEntry(id="bat1", name="NP-FZ100 Battery", brand="Sony", essential=True, quantity=4),
    ]
