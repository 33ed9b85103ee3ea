"""
Sanity tests to verify test infrastructure is working correctly.
These tests ensure basic imports and environment setup function properly.
"""

import pytest
import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


class TestSanityChecks:
    """Basic sanity checks for test infrastructure."""

    def test_python_version(self):
        """Ensure Python version is 3.8+."""
        assert sys.version_info >= (3, 8), f"Python 3.8+ required, got {sys.version_info}"

    def test_imports_work(self):
        """Test that basic project imports work."""
        try:
            import core
            import indicators
            from core import signals, window
            from indicators import ma, oscillators, trend, volatility
        except ImportError as e:
            pytest.fail(f"Failed to import project modules: {e}")

    def test_src_directory_structure(self):
        """Verify src directory contains expected packages."""
        src_dir = Path(__file__).parent.parent / "src"

        expected_files = [
            "core/__init__.py",
            "core/window.py",
            "core/signals.py",
            "indicators/__init__.py",
            "indicators/ma.py",
        ]

        for file_name in expected_files:
            file_path = src_dir / file_name
            assert file_path.exists(), f"Expected file {file_name} not found in src/"

    def test_public_exports(self):
        import core
        import indicators

        for name in core.__all__:
            assert hasattr(core, name), name
        for name in indicators.__all__:
            assert hasattr(indicators, name), name


class TestDependencies:
    """Test that required dependencies are installed."""

    def test_pandas_available(self):
        """Test pandas is installed."""
        try:
            import pandas as pd
            assert hasattr(pd, 'DataFrame')
        except ImportError:
            pytest.fail("pandas not installed")

    def test_numpy_available(self):
        """Test numpy is installed."""
        try:
            import numpy as np
            assert hasattr(np, 'array')
        except ImportError:
            pytest.fail("numpy not installed")
