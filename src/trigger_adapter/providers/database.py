"""
Realtime Database reference builders.

Any path component in curly brackets is a wildcard that matches one
segment; the matched value is exposed through ``context.params``. For
example ``ref('messages/{messageId}')`` matches writes at
``/messages/message1``, setting ``context.params['messageId']`` to
``'message1'``.

Database invocations are the only ones that carry auth state; the normalizer
resolves ``context.auth_type`` and ``context.auth`` for them.
"""

import copy
import re
from typing import Any, Callable, Optional, Tuple

from trigger_adapter.exceptions import ConfigurationError
from trigger_adapter.handlers.cloud_function import CloudFunction, make_cloud_function
from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.logic.auth_resolver import DATABASE_PROVIDER
from trigger_adapter.logic.paths import apply_change, join_path, normalize_path, path_parts, val_at
from trigger_adapter.models.change import Change
from trigger_adapter.models.context import Event
from trigger_adapter.models.options import DeploymentOptions, Handler, InvocationOptions
from trigger_adapter.providers.base import legacy_event_type

PROVIDER = DATABASE_PROVIDER
SERVICE = 'firebaseio.com'

RESOURCE_REGEX = re.compile(r'^projects/([^/]+)/instances/([a-zA-Z0-9\-]+)/refs(/.+)?')


def resource_to_instance_and_path(resource: str) -> Tuple[str, str]:
    """
    Split a database resource name into instance URL and ref path.

    Raises:
        ValueError: If the resource is not a database ref
    """
    match = RESOURCE_REGEX.match(resource or '')
    if not match:
        raise ValueError(f'Unexpected resource string for database event: {resource}')
    project, instance, path = match.groups()
    if project != '_':
        raise ValueError(f'Expected project to be "_" in database resource, got {project}')
    return f'https://{instance}.firebaseio.com', path or '/'


class DataSnapshot:
    """Immutable view of the data at a database location."""

    def __init__(self, data: Any, path: Optional[str] = None, instance: Optional[str] = None,
                 child_path: Optional[str] = None):
        self._data = data
        self._path = path
        self._child_path = child_path
        self.instance = instance

    @property
    def key(self) -> Optional[str]:
        parts = path_parts(self._full_path())
        return parts[-1] if parts else None

    def val(self) -> Any:
        value = val_at(self._data, self._child_path)
        return copy.deepcopy(value) if value != {} else None

    def export_val(self) -> Any:
        return self.val()

    def exists(self) -> bool:
        return self.val() is not None

    def child(self, child_path: str) -> 'DataSnapshot':
        if not child_path:
            return self
        return DataSnapshot(self._data, self._path, self.instance, join_path(self._child_path, child_path))

    def for_each(self, action: Callable[['DataSnapshot'], Any]) -> bool:
        """Call ``action`` for each child in key order; a truthy return stops iteration."""
        value = self.val()
        if not isinstance(value, dict):
            return False
        for key in sorted(value):
            if action(self.child(key)) is True:
                return True
        return False

    def has_child(self, child_path: str) -> bool:
        return self.child(child_path).exists()

    def has_children(self) -> bool:
        value = self.val()
        return isinstance(value, dict) and bool(value)

    def num_children(self) -> int:
        value = self.val()
        return len(value) if isinstance(value, dict) else 0

    def to_json(self) -> Any:
        return self.val()

    def _full_path(self) -> str:
        return join_path(self._path, self._child_path)


def _snapshot(event: Event, data: Any) -> DataSnapshot:
    instance, path = resource_to_instance_and_path(event.context.resource_name)
    return DataSnapshot(data, path, instance)


def _payload(event: Event) -> Tuple[Any, Any]:
    raw = event.data or {}
    return raw.get('data'), raw.get('delta')


def created_snapshot(event: Event) -> DataSnapshot:
    _, delta = _payload(event)
    return _snapshot(event, delta)


def deleted_snapshot(event: Event) -> DataSnapshot:
    data, _ = _payload(event)
    return _snapshot(event, data)


def change_constructor(event: Event) -> Change[DataSnapshot]:
    data, delta = _payload(event)
    return Change.from_objects(_snapshot(event, data), _snapshot(event, apply_change(data, delta)))


class RefBuilder:
    """Builder for functions fired by writes at or below a ref."""

    def __init__(self, instance: Optional[str], path: str, deployment: DeploymentOptions,
                 config: Optional[AdapterConfig] = None):
        self.instance = instance
        self.path = normalize_path(path)
        self.deployment = deployment
        self.config = config

    def trigger_resource(self, config: AdapterConfig) -> str:
        instance = self.instance or config.default_database_instance
        if not instance:
            raise ConfigurationError(
                'Missing expected database URL; set FIREBASE_CONFIG or select an instance explicitly.',
                details={'setting': 'FIREBASE_CONFIG'},
            )
        return f'projects/_/instances/{instance}/refs/{self.path}'

    def on_write(self, handler: Handler) -> CloudFunction:
        """Respond to any write that affects the ref."""
        return self._on_operation(handler, 'ref.write', change_constructor)

    def on_update(self, handler: Handler) -> CloudFunction:
        """Respond to updates on the ref."""
        return self._on_operation(handler, 'ref.update', change_constructor)

    def on_create(self, handler: Handler) -> CloudFunction:
        """Respond to new data on the ref."""
        return self._on_operation(handler, 'ref.create', created_snapshot)

    def on_delete(self, handler: Handler) -> CloudFunction:
        """Respond to all data being deleted from the ref."""
        return self._on_operation(handler, 'ref.delete', deleted_snapshot)

    def _on_operation(self, handler, event_type, data_constructor) -> CloudFunction:
        return make_cloud_function(InvocationOptions(
            provider=PROVIDER,
            service=SERVICE,
            event_type=event_type,
            trigger_resource=self.trigger_resource,
            legacy_event_type=legacy_event_type(PROVIDER, event_type),
            data_constructor=data_constructor,
            handler=handler,
            deployment=self.deployment,
        ), self.config)


class InstanceBuilder:
    def __init__(self, instance: str, deployment: DeploymentOptions, config: Optional[AdapterConfig] = None):
        self.instance = instance
        self.deployment = deployment
        self.config = config

    def ref(self, path: str) -> RefBuilder:
        return RefBuilder(self.instance, path, self.deployment, self.config)


def instance(
    name: str,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> InstanceBuilder:
    """Select the database instance; the project default is used otherwise."""
    return InstanceBuilder(name, deployment or DeploymentOptions(), config)


def ref(
    path: str,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> RefBuilder:
    """Select the ref to listen to, e.g. ``messages/{messageId}``."""
    return RefBuilder(None, path, deployment or DeploymentOptions(), config)
