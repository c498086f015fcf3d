"""
Pytest configuration for the scalpel test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Sample JavaScript and CSS sources shared by the codemod tests
- A facade fixture
"""

import os

import pytest

from scalpel.cli.config import CLIConfig
from scalpel.logging_config import reset_logging, setup_logging
from scalpel.mutation import CodemodFacade


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Run the suite in machine mode."""
    os.environ.setdefault("SCALPEL_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    reset_logging()
    setup_logging(level="DEBUG", suppress_console=True)
    yield
    CLIConfig.reset()


# ============================================================================
# SOURCE FIXTURES
# ============================================================================

APP_JS = """\
import "phoenix_html";
import { Socket } from "phoenix";
import { LiveSocket } from "phoenix_live_view";
import topbar from "../vendor/topbar";

let csrfToken = document.querySelector("meta[name='csrf-token']").getAttribute("content");

let liveSocket = new LiveSocket("/live", Socket, {
  longPollFallbackMs: 2500,
  params: { _csrf_token: csrfToken },
});

// connect if there are any LiveViews on the page
liveSocket.connect();
"""

APP_CSS = """\
@import "tailwindcss/base";
@import url("tailwindcss/components");

/* Buttons */
.btn {
  color: red; /* brand */
  padding: 4px;
}

a:hover { /* hover state */
  color: blue;
}
"""


@pytest.fixture
def app_js():
    return APP_JS


@pytest.fixture
def app_css():
    return APP_CSS


@pytest.fixture
def facade():
    return CodemodFacade()


@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory for tests that write files."""
    return tmp_path
