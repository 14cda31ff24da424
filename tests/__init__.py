"""
Test suite for Transaction ERP Mapper.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_transform_service.py -v
"""
