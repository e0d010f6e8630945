"""
Invocation context models.

``EventContext`` is the canonical, per-invocation description of an event
that user handlers receive alongside the payload. It is always built from the
new wire shape; older shapes are converted by the legacy adapter first.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from trigger_adapter.exceptions import ParamsUnavailableError


class AuthType(str, Enum):
    """Authentication state of an invocation."""

    ADMIN = 'ADMIN'
    USER = 'USER'
    UNAUTHENTICATED = 'UNAUTHENTICATED'


class AuthRecord(BaseModel):
    """Identity of the end user that caused the event."""

    model_config = ConfigDict(frozen=True)

    uid: Optional[str] = None
    token: Optional[Union[Dict[str, Any], str]] = None


class Resource(BaseModel):
    """Fully qualified resource that emitted the event."""

    model_config = ConfigDict(frozen=True)

    service: Optional[str] = None
    name: str


class Resolved(BaseModel):
    """Wildcard parameters were extracted from the resource path."""

    model_config = ConfigDict(frozen=True)

    params: Dict[str, Optional[str]] = Field(default_factory=dict)


class Unavailable(BaseModel):
    """The builder has no trigger resource, so there is nothing to match."""

    model_config = ConfigDict(frozen=True)

    reason: str


ParamsResult = Union[Resolved, Unavailable]


class EventContext(BaseModel):
    """Metadata describing a single invocation."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='allow',
    )

    event_id: Annotated[Optional[str], Field(
        description='Unique identifier of the event'
    )] = None

    timestamp: Annotated[Optional[str], Field(
        description='ISO timestamp at which the event happened'
    )] = None

    event_type: Annotated[Optional[str], Field(
        description='Type of the event, e.g. google.pubsub.topic.publish'
    )] = None

    resource: Annotated[Optional[Union[Resource, str]], Field(
        description='Resource that emitted the event'
    )] = None

    auth_type: Annotated[Optional[AuthType], Field(
        description='Authentication state, only set for database events'
    )] = None

    auth: Annotated[Optional[AuthRecord], Field(
        description='End-user identity, only set for USER database events'
    )] = None

    params_result: Annotated[Optional[ParamsResult], Field(
        exclude=True,
        description='Outcome of wildcard extraction for this invocation'
    )] = None

    @property
    def resource_name(self) -> Optional[str]:
        """Name of the resource regardless of its wire shape."""
        if isinstance(self.resource, Resource):
            return self.resource.name
        return self.resource

    @property
    def params(self) -> Dict[str, Optional[str]]:
        """
        Wildcard values matched from the trigger resource.

        Raises:
            ParamsUnavailableError: If the function was built from a namespace
                and has no trigger resource to match against.
        """
        if isinstance(self.params_result, Unavailable):
            raise ParamsUnavailableError(self.params_result.reason)
        if self.params_result is None:
            return {}
        return self.params_result.params

    def to_wire(self) -> Dict[str, Any]:
        """Serialize back to the camelCase wire shape."""
        return self.model_dump(by_alias=True, exclude_none=True, mode='json')


class Event(BaseModel):
    """Canonical ``{data, context}`` pair handed to hooks and data constructors."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: Any = None
    context: EventContext
