"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def render_passes():
    """Two render passes of the same shot."""
    return ["shot_001_diffuse.jpg", "shot_001_specular.jpg"]


@pytest.fixture
def mixed_passes():
    """Bare beauty image plus two passes with different extensions."""
    return ["shot_001.jpg", "shot_001_diffuse.tiff", "shot_001_specular.jpeg"]


@pytest.fixture
def make_files(tmp_path):
    """Create empty files named ``names`` in a temporary folder."""

    def _make(*names):
        for name in names:
            (tmp_path / name).write_bytes(b"")
        return tmp_path

    return _make


@pytest.fixture
def memory_listing():
    """Build an in-memory directory listing for the scanner.

    ``folders`` maps a folder path to its entry names; unknown folders raise
    ``FileNotFoundError`` like a missing directory would. Every call is
    recorded in ``listing.calls``.
    """

    def _build(folders):
        folders = {Path(key): list(value) for key, value in folders.items()}

        def listing(directory):
            listing.calls.append(Path(directory))
            try:
                return list(folders[Path(directory)])
            except KeyError:
                raise FileNotFoundError(directory) from None

        listing.calls = []
        return listing

    return _build
