"""
Deployment option builder.

``region`` and ``run_with`` accumulate deployment options and expose every
provider's entry points with those options applied::

    region('europe-west1').run_with(memory='1GB').pubsub.topic('jobs').on_publish(handler)
"""

from functools import partial
from types import SimpleNamespace
from typing import Optional

from trigger_adapter.exceptions import ConfigurationError
from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.logic.trigger_builder import MEMORY_LOOKUP
from trigger_adapter.models.options import DeploymentOptions
from trigger_adapter.providers import analytics, auth, database, firestore, pubsub, remote_config

MAX_TIMEOUT_SECONDS = 540


def _validate_regions(regions) -> None:
    if not regions:
        raise ConfigurationError('You must specify at least one region')
    if any(not isinstance(name, str) or not name for name in regions):
        raise ConfigurationError('Regions must be non-empty strings', details={'regions': list(regions)})


def _validate_runtime_options(timeout_seconds: Optional[int], memory: Optional[str]) -> None:
    if memory is not None and memory not in MEMORY_LOOKUP:
        raise ConfigurationError(
            f"The only valid memory allocation values are: {', '.join(MEMORY_LOOKUP)}",
            details={'memory': memory},
        )
    if timeout_seconds is not None and not 0 <= timeout_seconds <= MAX_TIMEOUT_SECONDS:
        raise ConfigurationError(
            f'TimeoutSeconds must be between 0 and {MAX_TIMEOUT_SECONDS}',
            details={'timeout_seconds': timeout_seconds},
        )


class FunctionBuilder:
    """Accumulates deployment options for the functions built from it."""

    def __init__(self, deployment: Optional[DeploymentOptions] = None, config: Optional[AdapterConfig] = None):
        self.deployment = deployment or DeploymentOptions()
        self.config = config

    def region(self, *regions: str) -> 'FunctionBuilder':
        """Deploy to one or more regions, e.g. ``region('us-east1', 'us-central1')``."""
        _validate_regions(regions)
        return FunctionBuilder(self.deployment.model_copy(update={'regions': list(regions)}), self.config)

    def run_with(self, timeout_seconds: Optional[int] = None, memory: Optional[str] = None) -> 'FunctionBuilder':
        """
        Configure runtime options.

        Args:
            timeout_seconds: Timeout in seconds, 0 to 540
            memory: One of 128MB, 256MB, 512MB, 1GB, 2GB

        Raises:
            ConfigurationError: If either value is out of range
        """
        _validate_runtime_options(timeout_seconds, memory)
        updates = {}
        if timeout_seconds is not None:
            updates['timeout_seconds'] = timeout_seconds
        if memory is not None:
            updates['memory'] = memory
        return FunctionBuilder(self.deployment.model_copy(update=updates), self.config)

    def _bind(self, func):
        return partial(func, deployment=self.deployment, config=self.config)

    @property
    def pubsub(self) -> SimpleNamespace:
        return SimpleNamespace(topic=self._bind(pubsub.topic), schedule=self._bind(pubsub.schedule))

    @property
    def firestore(self) -> SimpleNamespace:
        return SimpleNamespace(
            document=self._bind(firestore.document),
            namespace=self._bind(firestore.namespace),
            database=self._bind(firestore.database),
        )

    @property
    def database(self) -> SimpleNamespace:
        return SimpleNamespace(ref=self._bind(database.ref), instance=self._bind(database.instance))

    @property
    def auth(self) -> SimpleNamespace:
        return SimpleNamespace(user=self._bind(auth.user))

    @property
    def analytics(self) -> SimpleNamespace:
        return SimpleNamespace(event=self._bind(analytics.event))

    @property
    def remote_config(self) -> SimpleNamespace:
        return SimpleNamespace(on_update=self._bind(remote_config.on_update))


def region(*regions: str) -> FunctionBuilder:
    return FunctionBuilder().region(*regions)


def run_with(timeout_seconds: Optional[int] = None, memory: Optional[str] = None) -> FunctionBuilder:
    return FunctionBuilder().run_with(timeout_seconds=timeout_seconds, memory=memory)
