import os
from pathlib import Path

import pytest

# Test layer directory -> marker applied to every test collected under it
_LAYER_MARKERS = {
    "domain": "domain",
    "application": "application",
    "bdd": "bdd",
    "integration": "integration",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="domain.toml overlay to run the suite against (test, production)",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the storefront domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    for item in items:
        layers = set(Path(item.fspath).parts) & _LAYER_MARKERS.keys()
        for layer in layers:
            item.add_marker(getattr(pytest.mark, _LAYER_MARKERS[layer]))

        if "integration" in layers and not any(m.name == "fast" for m in item.iter_markers()):
            item.add_marker(pytest.mark.slow)
