"""Shared fixtures for integration tests."""

import os

import pytest

from typedcms.delivery import ClientConfig

# Skip all integration tests unless RUN_TYPEDCMS_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_TYPEDCMS_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_TYPEDCMS_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def live_config() -> ClientConfig:
    """Config from TYPEDCMS_* variables; skips when they are not set."""
    if not os.environ.get("TYPEDCMS_SPACE_ID") or not os.environ.get("TYPEDCMS_ACCESS_TOKEN"):
        pytest.skip("TYPEDCMS_SPACE_ID and TYPEDCMS_ACCESS_TOKEN are required")
    return ClientConfig.from_env()
