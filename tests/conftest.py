import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

import pytest

# Must run before intranet_search.core.config is imported anywhere.
os.environ.setdefault("PORTAL_LOGS_DIR", tempfile.mkdtemp(prefix="intranet-search-logs-"))
os.environ.setdefault("NO_COLOR", "1")


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run the e2e tests against a live portal.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "e2e: runs against a live portal with a session token")
    config.addinivalue_line("markers", "property: property-based deterministic tests")


def pytest_collection_modifyitems(config: pytest.Config, items: Sequence[pytest.Item]) -> None:
    e2e_dir = Path(__file__).parent / "e2e"
    live_portal = config.getoption("--run-integration")
    needs_portal = pytest.mark.skip(reason="needs a live portal; pass --run-integration")

    for item in items:
        if e2e_dir in item.path.parents:
            item.add_marker("e2e")
        if not live_portal and item.get_closest_marker("e2e"):
            item.add_marker(needs_portal)
