import pytest

import pyiri.iri


def pytest_addoption(parser):
    # Do only long options for pytest integration; pytest reserves
    # lowercase single-letter short options for its own CLI flags.
    parser.addoption(
        '--network', action='store_true', default=False,
        help='Run tests that need network access'
    )


def pytest_configure(config):
    # Register custom markers
    config.addinivalue_line(
        "markers", "network: marks tests as requiring network access (may be slow)"
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption('network'):
        return
    skip_network = pytest.mark.skip(reason='needs --network to run')
    for item in items:
        if 'network' in item.keywords:
            item.add_marker(skip_network)


@pytest.fixture
def default_loader():
    """Restore the module level document loader after a test replaces it."""
    saved = pyiri.iri.get_document_loader()
    yield saved
    pyiri.iri.set_document_loader(saved)
