"""
Unit tests for the deployment option builder.
"""

import pytest

from trigger_adapter import FunctionBuilder, region, run_with
from trigger_adapter.exceptions import ConfigurationError


class TestFunctionBuilder:
    """Test cases for FunctionBuilder."""

    def test_region_and_runtime_options(self, adapter_config):
        """Test that accumulated options reach the descriptor."""
        builder = FunctionBuilder(config=adapter_config).region('europe-west1').run_with(
            timeout_seconds=120, memory='1GB'
        )

        function = builder.pubsub.topic('jobs').on_publish(lambda message, context: None)

        assert function.trigger == {
            'regions': ['europe-west1'],
            'timeout': '120s',
            'availableMemoryMb': 1024,
            'eventTrigger': {
                'resource': 'projects/test-project/topics/jobs',
                'eventType': 'google.pubsub.topic.publish',
                'service': 'pubsub.googleapis.com',
            },
        }

    def test_builders_are_immutable(self):
        """Test that chaining returns new builders."""
        base = FunctionBuilder()
        regional = base.region('us-east1')

        assert base.deployment.regions is None
        assert regional.deployment.regions == ['us-east1']

    def test_run_with_keeps_unset_values(self):
        """Test that a later run_with call does not clear earlier values."""
        builder = run_with(memory='512MB').run_with(timeout_seconds=30)

        assert builder.deployment.memory == '512MB'
        assert builder.deployment.timeout_seconds == 30

    def test_module_level_region(self):
        """Test the module-level entry point."""
        assert region('us-central1', 'asia-east2').deployment.regions == ['us-central1', 'asia-east2']

    @pytest.mark.parametrize('kwargs', [
        {'memory': '3GB'},
        {'timeout_seconds': 541},
        {'timeout_seconds': -1},
    ])
    def test_invalid_runtime_options(self, kwargs):
        """Test runtime option validation."""
        with pytest.raises(ConfigurationError) as exc_info:
            run_with(**kwargs)
        assert exc_info.value.error_code == 'CONFIGURATION_ERROR'

    def test_region_required(self):
        """Test that at least one region is needed."""
        with pytest.raises(ConfigurationError):
            region()

    def test_every_provider_exposed(self, adapter_config):
        """Test provider namespaces carry the builder's options."""
        builder = FunctionBuilder(config=adapter_config).region('us-east1')

        functions = [
            builder.firestore.document('users/{uid}').on_create(lambda snap, context: None),
            builder.database.ref('messages/{id}').on_write(lambda change, context: None),
            builder.auth.user().on_create(lambda user, context: None),
            builder.analytics.event('purchase').on_log(lambda event, context: None),
            builder.remote_config.on_update(lambda version, context: None),
            builder.pubsub.schedule('every 5 minutes').on_run(lambda context: None),
        ]

        assert all(function.trigger['regions'] == ['us-east1'] for function in functions)
