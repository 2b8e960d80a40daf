"""Dummy benchmark modules scanned by the tests."""
