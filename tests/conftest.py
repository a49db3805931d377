"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project directory to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from typing import Callable

from services.dispatch_service import DispatchService


# ===================
# WORK ROOT
# ===================

@pytest.fixture
def work_root(tmp_path) -> Path:
    """Empty work root, one per test."""
    root = tmp_path / "inbox"
    root.mkdir()
    return root


@pytest.fixture
def make_file(work_root) -> Callable[..., Path]:
    """
    Create a file in the work root.

    Usage:
        def test_something(make_file):
            path = make_file("a1.txt", b"hello")
    """
    def _make(name: str, content: bytes = b"") -> Path:
        path = work_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _make


@pytest.fixture
def demo_files(make_file) -> list[Path]:
    """The three empty demo files a1.txt, b1.txt, c1.txt."""
    return [make_file(name) for name in ("a1.txt", "b1.txt", "c1.txt")]


@pytest.fixture
def dispatcher(work_root) -> DispatchService:
    """Dispatcher bound to the per-test work root."""
    return DispatchService(work_root)
