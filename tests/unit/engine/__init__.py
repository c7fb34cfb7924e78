"""
Tests for the engine package: normalizer, matching, polling, selection and
report verification. Fake pages and locators live in tests/conftest.py.
"""
