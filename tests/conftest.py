"""
Suite-wide pytest configuration.

Fixtures live next to the tests that use them (tests/gpio/conftest.py);
this file only registers the markers shared by every test package.
"""


def pytest_configure(config):
    """
    Configure pytest with custom markers.

    Markers let you categorize and selectively run tests:
        pytest -m unit          # Only unit tests
        pytest -m integration   # Only integration tests
        pytest -m "not slow"    # Skip slow tests
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (may be slower)")
    config.addinivalue_line("markers", "slow: Slow tests (use sparingly)")
    config.addinivalue_line("markers", "hardware: Tests requiring real hardware")
