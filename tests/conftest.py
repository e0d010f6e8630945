"""
Pytest configuration and shared fixtures for the trigger adapter.

This module provides common test fixtures and configuration used across
unit and integration tests.
"""

import asyncio
import os
from typing import Any, Dict
from unittest.mock import Mock

import pytest

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "test-trigger-adapter")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "TestTriggerAdapter")

from aws_lambda_env_modeler import modeler_impl as _env_modeler_impl  # noqa: E402

from trigger_adapter.handlers.models.env_vars import AdapterConfig  # noqa: E402
from trigger_adapter.handlers.utils.observability import metrics  # noqa: E402

PROJECT_ID = "test-project"


# Test environment configuration
@pytest.fixture(scope="session", autouse=True)
def test_environment():
    """Set up test environment variables."""
    os.environ.update({
        "GCLOUD_PROJECT": PROJECT_ID,
        "X_GOOGLE_NEW_FUNCTION_SIGNATURE": "false",
        "FIREBASE_CONFIG": '{"databaseURL": "https://test-db.firebaseio.com"}',
        "LOG_LEVEL": "DEBUG",
    })


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached environment models and buffered metrics between tests."""
    # The library keeps its per-model LRU cache in a private module-level function.
    env_model_cache = getattr(_env_modeler_impl, "__parse_model_with_cache")
    env_model_cache.cache_clear()
    metrics.clear_metrics()
    yield
    env_model_cache.cache_clear()
    metrics.clear_metrics()


@pytest.fixture
def adapter_config() -> AdapterConfig:
    """Configuration with a project and a default database."""
    return AdapterConfig(project_id=PROJECT_ID, database_url="https://test-db.firebaseio.com")


@pytest.fixture
def new_signature_config() -> AdapterConfig:
    """Configuration with the (data, context) calling convention enabled."""
    return AdapterConfig(project_id=PROJECT_ID, new_function_signature=True)


@pytest.fixture
def run():
    """Drive an awaitable returned by a CloudFunction to completion."""
    def _run(awaitable):
        async def _wait():
            return await awaitable
        return asyncio.run(_wait())
    return _run


@pytest.fixture
def firestore_resource() -> str:
    return f"projects/{PROJECT_ID}/databases/(default)/documents/users/alice"


@pytest.fixture
def current_format_event(firestore_resource) -> Dict[str, Any]:
    """Invocation in the current wire shape, with a context envelope."""
    return {
        "data": {"value": {"fields": {"name": {"stringValue": "Alice"}}}},
        "context": {
            "eventId": "evt-123",
            "timestamp": "2024-01-01T12:00:00.000Z",
            "eventType": "google.firestore.document.create",
            "resource": {"service": "firestore.googleapis.com", "name": firestore_resource},
        },
    }


@pytest.fixture
def legacy_format_event(firestore_resource) -> Dict[str, Any]:
    """Invocation in the older wire shape, context fields inlined."""
    return {
        "data": {"value": {"fields": {"name": {"stringValue": "Alice"}}}},
        "eventId": "evt-456",
        "timestamp": "2024-01-01T12:00:00.000Z",
        "eventType": "providers/cloud.firestore/eventTypes/document.create",
        "resource": firestore_resource,
    }


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-lambda-function"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-lambda-function"
    context.memory_limit_in_mb = 512
    context.get_remaining_time_in_millis = lambda: 30000
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-lambda-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    return context


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
