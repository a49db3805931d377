"""
Test suite for file-dispatcher.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_dispatch_service.py -v
"""
