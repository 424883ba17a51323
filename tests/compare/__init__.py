"""
Text Compare Tests Package
==========================
Test suite for the side-by-side row generator.

Run all tests: python3 -m pytest tests/compare/ -v
Run specific: python3 -m pytest tests/compare/test_aligner.py -v
"""

__version__ = "1.0.0"
