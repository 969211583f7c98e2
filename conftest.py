"""Pytest configuration: register custom markers."""


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: marks tests that need the full uroman data files"
    )
