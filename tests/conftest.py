import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _restbucks_domain(request):
    """Initialize the restbucks domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from restbucks.domain import restbucks

    restbucks.init()
    return restbucks


@pytest.fixture(scope="session", autouse=True)
def setup_db(_restbucks_domain):
    from restbucks.utils.db import drop_db, setup_db

    setup_db(_restbucks_domain)

    yield

    drop_db(_restbucks_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_restbucks_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _restbucks_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain
    from restbucks.utils.clock import reset_clock

    reset_clock()

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()
