"""Shared test fixtures for jamulus-rpc test suite."""

from __future__ import annotations

import os

# Configure Django settings before any Django imports
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "tests.settings")

import django

django.setup()

import pytest

from jamulus_rpc.config import RpcConfig, reset_config
from jamulus_rpc.dispatcher import RequestDispatcher
from jamulus_rpc.handlers import build_registry
from jamulus_rpc.registry import MethodRegistry
from tests.fixtures.fake_server import FakeMediaServer

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _fresh_config():
    """Reload configuration from settings for every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def rpc_config():
    """Configuration that does not depend on Django settings."""
    return RpcConfig(enable_firewall_methods=True, sanitize_errors=True)


# ============================================================================
# Server and Dispatcher Fixtures
# ============================================================================


@pytest.fixture
def server():
    """In-memory media server."""
    return FakeMediaServer()


@pytest.fixture
def registry():
    """Frozen registry holding every server method."""
    return build_registry(enable_firewall=True)


@pytest.fixture
def empty_registry():
    """Registry without any methods, still open for registration."""
    return MethodRegistry()


@pytest.fixture
def dispatcher(server, registry, rpc_config):
    """Dispatcher bound to the fake server."""
    return RequestDispatcher(server, registry, config=rpc_config)


@pytest.fixture
def call(dispatcher):
    """Send a request with id 1 and return the response."""

    def _call(method, params=None, rpc_id=1):
        request = {"jsonrpc": "2.0", "method": method, "id": rpc_id}
        if params is not None:
            request["params"] = params
        return dispatcher.dispatch(request)

    return _call


# ============================================================================
# Parametrized Invalid Value Fixtures
# ============================================================================


@pytest.fixture(params=[None, 42, 4.2, True, [], {}, ["1.2.3.4"]])
def non_string_value(request):
    """Parametrized fixture for values that are not strings."""
    return request.param


@pytest.fixture(params=[None, "", [], {}, 123, 45.6, True, False])
def invalid_method_value(request):
    """Parametrized fixture for invalid method names."""
    return request.param
