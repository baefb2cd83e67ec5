"""Integration tests for recipebox.

These tests require a PostgreSQL database (see TEST_DATABASE_URL).

Run with: pytest tests/integration/ -v -m integration
Skip with: pytest -m "not integration"
"""
