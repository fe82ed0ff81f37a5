import os
from pathlib import Path

import pytest

# Directory name -> marker applied to every test collected below it
_LAYER_MARKERS = {
    "domain": pytest.mark.domain,
    "application": pytest.mark.application,
    "integration": pytest.mark.integration,
    "bdd": pytest.mark.bdd,
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Protean config overlay (PROTEAN_ENV) the domains load",
    )


def pytest_sessionstart(session):
    """Pick the config overlay and route logs to the console before any domain loads.

    Domain modules configure logging on import; configuring it first here makes
    those calls no-ops, so test runs never create a ``logs/`` directory.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from shared.logging import configure_logging

    configure_logging(log_dir=None)


def pytest_collection_modifyitems(config, items):
    """Mark each test with its layer, taken from the directory it lives in."""
    for item in items:
        parts = Path(item.fspath).parts
        for directory, marker in _LAYER_MARKERS.items():
            if directory in parts:
                item.add_marker(marker)

        # The full HTTP stack is slow unless a test opts out
        if "integration" in parts and not any(m.name == "fast" for m in item.iter_markers()):
            item.add_marker(pytest.mark.slow)
