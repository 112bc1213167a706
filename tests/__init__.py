"""
Test suite for the POD operations backend.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_autofill_parser.py -v
"""
