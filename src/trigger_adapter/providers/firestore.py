"""
Cloud Firestore document builders.

Document payloads arrive as ``value``/``oldValue`` records carrying typed
``fields`` plus ``createTime``, ``updateTime`` and ``readTime``; they are
decoded into plain ``DocumentSnapshot`` objects here.
"""

import base64
import posixpath
import re
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from trigger_adapter.handlers.cloud_function import CloudFunction, make_cloud_function
from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.models.change import Change, get_path
from trigger_adapter.models.context import Event
from trigger_adapter.models.options import DeploymentOptions, Handler, InvocationOptions
from trigger_adapter.providers.base import legacy_event_type, require_project

PROVIDER = 'google.firestore'
SERVICE = 'firestore.googleapis.com'
LEGACY_PROVIDER = 'cloud.firestore'
DEFAULT_DATABASE = '(default)'


_FRACTION_REGEX = re.compile(r'\.(\d+)')


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; fractions of any length are cut or padded to microseconds."""
    if not value:
        return None
    value = _FRACTION_REGEX.sub(lambda match: '.' + match.group(1)[:6].ljust(6, '0'), value, count=1)
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


def decode_value(value: Mapping[str, Any]) -> Any:
    """Decode one typed Firestore value into a Python value."""
    if 'nullValue' in value:
        return None
    if 'booleanValue' in value:
        return bool(value['booleanValue'])
    if 'integerValue' in value:
        return int(value['integerValue'])
    if 'doubleValue' in value:
        return float(value['doubleValue'])
    if 'timestampValue' in value:
        return _parse_timestamp(value['timestampValue'])
    if 'stringValue' in value:
        return value['stringValue']
    if 'bytesValue' in value:
        return base64.b64decode(value['bytesValue'])
    if 'referenceValue' in value:
        return value['referenceValue']
    if 'geoPointValue' in value:
        point = value['geoPointValue']
        return {'latitude': point.get('latitude', 0.0), 'longitude': point.get('longitude', 0.0)}
    if 'arrayValue' in value:
        return [decode_value(item) for item in (value['arrayValue'] or {}).get('values', [])]
    if 'mapValue' in value:
        return decode_fields((value['mapValue'] or {}).get('fields', {}))
    raise ValueError(f'Unsupported Firestore value: {sorted(value)}')


def decode_fields(fields: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    return {name: decode_value(value) for name, value in (fields or {}).items()}


class DocumentSnapshot(BaseModel):
    """State of a document at a point in time; ``exists`` is False for missing documents."""

    model_config = ConfigDict(frozen=True)

    name: str
    exists: bool
    fields: Dict[str, Any] = {}
    create_time: Optional[datetime] = None
    update_time: Optional[datetime] = None
    read_time: Optional[datetime] = None

    @property
    def id(self) -> str:
        return self.name.rsplit('/', 1)[-1]

    @property
    def path(self) -> str:
        """Document path relative to the database, e.g. ``users/alice``."""
        _, _, relative = self.name.partition('/documents/')
        return relative or self.name

    def data(self) -> Optional[Dict[str, Any]]:
        return dict(self.fields) if self.exists else None

    def get(self, field_path: str) -> Any:
        if not self.exists:
            return None
        return get_path(self.fields, field_path, None)


def snapshot_from_proto(data: Optional[Mapping[str, Any]], resource_name: str, value_field: str) -> DocumentSnapshot:
    proto = (data or {}).get(value_field)
    if not proto:
        return DocumentSnapshot(name=resource_name, exists=False)
    return DocumentSnapshot(
        name=proto.get('name', resource_name),
        exists=True,
        fields=decode_fields(proto.get('fields')),
        create_time=_parse_timestamp(proto.get('createTime')),
        update_time=_parse_timestamp(proto.get('updateTime')),
        read_time=_parse_timestamp(proto.get('readTime')),
    )


def snapshot_constructor(event: Event) -> DocumentSnapshot:
    return snapshot_from_proto(event.data, event.context.resource_name, 'value')


def before_snapshot_constructor(event: Event) -> DocumentSnapshot:
    return snapshot_from_proto(event.data, event.context.resource_name, 'oldValue')


def change_constructor(event: Event) -> Change[DocumentSnapshot]:
    return Change.from_objects(before_snapshot_constructor(event), snapshot_constructor(event))


class DocumentBuilder:
    """Builder for functions fired by document writes."""

    def __init__(
        self,
        path: str,
        database: str,
        namespace: Optional[str],
        deployment: DeploymentOptions,
        config: Optional[AdapterConfig] = None,
    ):
        self.path = path
        self.database = database
        self.namespace = namespace
        self.deployment = deployment
        self.config = config

    def trigger_resource(self, config: AdapterConfig) -> str:
        database = posixpath.join('projects', require_project(config), 'databases', self.database)
        documents = f'documents@{self.namespace}' if self.namespace else 'documents'
        return posixpath.join(database, documents, self.path)

    def on_write(self, handler: Handler) -> CloudFunction:
        """Respond to all document writes (creates, updates, or deletes)."""
        return self._on_operation(handler, 'document.write', change_constructor)

    def on_update(self, handler: Handler) -> CloudFunction:
        """Respond only to document updates."""
        return self._on_operation(handler, 'document.update', change_constructor)

    def on_create(self, handler: Handler) -> CloudFunction:
        """Respond only to document creations."""
        return self._on_operation(handler, 'document.create', snapshot_constructor)

    def on_delete(self, handler: Handler) -> CloudFunction:
        """Respond only to document deletions."""
        return self._on_operation(handler, 'document.delete', before_snapshot_constructor)

    def _on_operation(self, handler, event_type, data_constructor) -> CloudFunction:
        return make_cloud_function(InvocationOptions(
            provider=PROVIDER,
            service=SERVICE,
            event_type=event_type,
            trigger_resource=self.trigger_resource,
            legacy_event_type=legacy_event_type(LEGACY_PROVIDER, event_type),
            data_constructor=data_constructor,
            handler=handler,
            deployment=self.deployment,
        ), self.config)


class NamespaceBuilder:
    def __init__(self, database: str, deployment: DeploymentOptions, namespace: Optional[str] = None,
                 config: Optional[AdapterConfig] = None):
        self.database = database
        self.deployment = deployment
        self.namespace_name = namespace
        self.config = config

    def document(self, path: str) -> DocumentBuilder:
        return DocumentBuilder(path, self.database, self.namespace_name, self.deployment, self.config)


class DatabaseBuilder:
    def __init__(self, database: str, deployment: DeploymentOptions, config: Optional[AdapterConfig] = None):
        self.database = database
        self.deployment = deployment
        self.config = config

    def namespace(self, namespace: str) -> NamespaceBuilder:
        return NamespaceBuilder(self.database, self.deployment, namespace, self.config)

    def document(self, path: str) -> DocumentBuilder:
        return NamespaceBuilder(self.database, self.deployment, config=self.config).document(path)


def database(
    name: str = DEFAULT_DATABASE,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> DatabaseBuilder:
    return DatabaseBuilder(name, deployment or DeploymentOptions(), config)


def namespace(
    name: str,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> NamespaceBuilder:
    return database(DEFAULT_DATABASE, deployment, config).namespace(name)


def document(
    path: str,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> DocumentBuilder:
    """
    Select the document to listen to, e.g. ``users/{userId}``.

    The path includes the collection name and may contain wildcards.
    """
    return database(DEFAULT_DATABASE, deployment, config).document(path)
