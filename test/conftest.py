"""Test configuration and shared fixtures."""

import pytest


# Global test configuration
def pytest_addoption(parser):
    """Add command line options to pytest."""
    parser.addoption("--runslow", action="store_true", default=False, help="run slow tests")

    # Group-specific options
    parser.addoption(
        "--group",
        action="store",
        default=None,
        choices=["unit", "integration", "io"],
        help="run specific test group",
    )


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")

    # Group markers
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")
    config.addinivalue_line("markers", "io: file output tests")
    config.addinivalue_line("markers", "field_generation: field generation tests")


def pytest_collection_modifyitems(config, items):
    """Modify pytest collection based on options."""
    # Group filtering
    group = config.getoption("--group")
    if group:
        items[:] = [item for item in items if group in item.keywords]

    # Slow test filtering
    if not config.getoption("--runslow"):
        skip_slow = pytest.mark.skip(reason="need --runslow option to run")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


@pytest.fixture
def kolmogorov_params():
    """Reference Kolmogorov configuration on an 8^3 grid."""
    return {
        "origin": (0.0, 0.0, 0.0),
        "samples": 8,
        "spacing": 1.0,
        "l_min": 2.0,
        "l_max": 4.0,
        "b_rms": 1.0,
        "spectral_index": -11.0 / 3.0,
        "seed": 42,
    }
