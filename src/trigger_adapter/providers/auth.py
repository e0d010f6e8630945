"""
Authentication user lifecycle builders.
"""

from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from trigger_adapter.handlers.cloud_function import CloudFunction, make_cloud_function
from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.models.context import Event
from trigger_adapter.models.options import DeploymentOptions, Handler, InvocationOptions
from trigger_adapter.providers.base import legacy_event_type, project_resource

PROVIDER = 'google.firebase.auth'
SERVICE = 'firebaseauth.googleapis.com'
LEGACY_PROVIDER = 'firebase.auth'


class UserRecordMetadata(BaseModel):
    """Creation and last sign-in times of a user."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    creation_time: Optional[str] = None
    last_sign_in_time: Optional[str] = None


class UserInfo(BaseModel):
    """Profile returned by one identity provider."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra='allow')

    uid: Optional[str] = None
    provider_id: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    photo_url: Annotated[Optional[str], Field(alias='photoURL')] = None
    phone_number: Optional[str] = None


class UserRecord(BaseModel):
    """User account the event is about."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra='allow')

    uid: str
    email: Optional[str] = None
    email_verified: bool = False
    display_name: Optional[str] = None
    photo_url: Annotated[Optional[str], Field(alias='photoURL')] = None
    phone_number: Optional[str] = None
    disabled: bool = False
    metadata: UserRecordMetadata = UserRecordMetadata()
    provider_data: List[UserInfo] = []
    custom_claims: Optional[Dict[str, Any]] = None

    @classmethod
    def from_wire(cls, wire_data: Optional[Dict[str, Any]]) -> 'UserRecord':
        """
        Build a record from the event payload.

        The wire format names the metadata fields ``createdAt`` and
        ``lastSignedInAt``.
        """
        fields = dict(wire_data or {})
        metadata = fields.pop('metadata', None) or {}
        fields['metadata'] = UserRecordMetadata(
            creation_time=metadata.get('createdAt', metadata.get('creationTime')),
            last_sign_in_time=metadata.get('lastSignedInAt', metadata.get('lastSignInTime')),
        )
        return cls.model_validate(fields)


def user_record_constructor(event: Event) -> UserRecord:
    return UserRecord.from_wire(event.data)


class UserBuilder:
    """Builder for functions fired when users are created or deleted."""

    def __init__(self, deployment: DeploymentOptions, config: Optional[AdapterConfig] = None):
        self.deployment = deployment
        self.config = config

    @staticmethod
    def trigger_resource(config: AdapterConfig) -> str:
        return project_resource(config)

    def on_create(self, handler: Handler) -> CloudFunction:
        """Respond to the creation of a user."""
        return self._on_operation(handler, 'user.create')

    def on_delete(self, handler: Handler) -> CloudFunction:
        """Respond to the deletion of a user."""
        return self._on_operation(handler, 'user.delete')

    def _on_operation(self, handler: Handler, event_type: str) -> CloudFunction:
        return make_cloud_function(InvocationOptions(
            provider=PROVIDER,
            service=SERVICE,
            event_type=event_type,
            trigger_resource=self.trigger_resource,
            legacy_event_type=legacy_event_type(LEGACY_PROVIDER, event_type),
            data_constructor=user_record_constructor,
            handler=handler,
            deployment=self.deployment,
        ), self.config)


def user(deployment: Optional[DeploymentOptions] = None, config: Optional[AdapterConfig] = None) -> UserBuilder:
    """Handle events related to user accounts."""
    return UserBuilder(deployment or DeploymentOptions(), config)
