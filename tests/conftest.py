"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import pytest

import cent.core.config as config_module
from cent import Money


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables and start from a fresh configuration."""
    monkeypatch.setenv("CENT_ENV", "test")
    monkeypatch.setenv("CENT_NUMBER_INPUT_MODE", "warn")
    monkeypatch.setenv("CENT_PRECISION_WARNING_THRESHOLD", "15")
    monkeypatch.setenv("CENT_DEFAULT_ROUNDING_MODE", "none")
    monkeypatch.setenv("CENT_DEFAULT_CURRENCY", "USD")
    monkeypatch.setenv("CENT_STRICT_PRECISION", "false")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("DEBUG", "false")

    # Ensure each test reads configuration from the variables above
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def hundred_dollars() -> Money:
    """$100.00"""
    return Money.parse("$100.00")


@pytest.fixture
def money_test_cases() -> list[dict]:
    """Money strings with their expected currency, decimal text and scale."""
    return [
        {"input": "$45.99", "currency": "USD", "amount": "45.99", "scale": 2},
        {"input": "$0.00", "currency": "USD", "amount": "0.00", "scale": 2},
        {"input": "€1.234,56", "currency": "EUR", "amount": "1234.56", "scale": 2},
        {"input": "¥1000", "currency": "JPY", "amount": "1000", "scale": 0},
        {"input": "0.5 BTC", "currency": "BTC", "amount": "0.50000000", "scale": 8},
    ]


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests across components"
    )
    config.addinivalue_line(
        "markers", "currency: Tests for money and currency arithmetic"
    )
    config.addinivalue_line(
        "markers", "parser: Tests for money string parsing"
    )
    config.addinivalue_line(
        "markers", "rounding: Tests for rounding modes"
    )
