"""
Declarative options a provider builder hands to the normalizer.

``InvocationOptions`` is created once per function when a builder is composed
and is never modified afterwards, so one instance is safely shared by any
number of concurrent invocations.
"""

from typing import Annotated, Any, Awaitable, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.models.context import Event, EventContext

# Label marking functions fired by a time-based schedule
SCHEDULED_LABEL = 'deployment-scheduled'

HandlerResult = Union[Any, Awaitable[Any]]
Handler = Callable[[Any, EventContext], HandlerResult]
ContextOnlyHandler = Callable[[EventContext], HandlerResult]
TriggerResource = Callable[[AdapterConfig], Optional[str]]


def _no_trigger(config: AdapterConfig) -> Optional[str]:
    return None


def _raw_data(event: Event) -> Any:
    return event.data


def _noop(event: Event) -> None:
    return None


class ScheduleRetryConfig(BaseModel):
    """Retry policy for scheduled functions."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    retry_count: Optional[int] = Field(default=None, ge=0)
    max_retry_duration: Optional[str] = None
    min_backoff_duration: Optional[str] = None
    max_backoff_duration: Optional[str] = None
    max_doublings: Optional[int] = Field(default=None, ge=0)


class Schedule(BaseModel):
    """Time-based schedule for a function."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    schedule: Annotated[str, Field(
        min_length=1,
        description='Schedule expression, e.g. "every 5 minutes"',
        examples=['every 5 minutes', '0 9 * * 1']
    )]

    time_zone: Annotated[Optional[str], Field(
        description='Time zone the schedule expression is evaluated in'
    )] = None

    retry_config: Annotated[Optional[ScheduleRetryConfig], Field(
        description='Retry policy applied to failed runs'
    )] = None


class DeploymentOptions(BaseModel):
    """Deployment settings copied into the trigger descriptor."""

    model_config = ConfigDict(frozen=True)

    regions: Annotated[Optional[List[str]], Field(
        description='Regions the function is deployed to',
        examples=[['us-central1', 'europe-west1']]
    )] = None

    timeout_seconds: Annotated[Optional[int], Field(
        ge=0,
        description='Function timeout in seconds'
    )] = None

    memory: Annotated[Optional[str], Field(
        description='Memory allocation, one of 128MB, 256MB, 512MB, 1GB, 2GB',
        examples=['256MB', '1GB']
    )] = None

    schedule: Annotated[Optional[Union[str, Schedule]], Field(
        description='Schedule expression or full schedule record'
    )] = None


class InvocationOptions(BaseModel):
    """Everything the normalizer needs to build a function."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    provider: Annotated[str, Field(
        min_length=1,
        description='Provider identifier, e.g. google.pubsub'
    )]

    event_type: Annotated[str, Field(
        min_length=1,
        description='Event type relative to the provider, e.g. topic.publish'
    )]

    service: Annotated[str, Field(
        min_length=1,
        description='Service hosting the resource, e.g. pubsub.googleapis.com'
    )]

    trigger_resource: Annotated[TriggerResource, Field(
        description='Resolves the resource path template; None marks a namespace-only builder'
    )] = _no_trigger

    data_constructor: Annotated[Callable[[Event], Any], Field(
        description='Builds the typed payload handed to the handler'
    )] = _raw_data

    handler: Optional[Handler] = None

    context_only_handler: Optional[ContextOnlyHandler] = None

    legacy_event_type: Annotated[Optional[str], Field(
        description='Older provider-specific event type identifier'
    )] = None

    before: Callable[[Event], None] = _noop

    after: Callable[[Event], None] = _noop

    deployment: DeploymentOptions = Field(default_factory=DeploymentOptions)

    labels: Dict[str, str] = Field(default_factory=dict)

    @model_validator(mode='after')
    def validate_handler_present(self) -> 'InvocationOptions':
        """Exactly the handler variant required by the labels must be set."""
        if self.is_scheduled:
            if self.context_only_handler is None:
                raise ValueError('scheduled functions require a context_only_handler')
        elif self.handler is None:
            raise ValueError('handler is required')
        return self

    @property
    def is_scheduled(self) -> bool:
        """Check if the function is fired by a schedule rather than a resource event."""
        return bool(self.labels.get(SCHEDULED_LABEL))

    @property
    def full_event_type(self) -> str:
        """Provider-qualified event type."""
        return f'{self.provider}.{self.event_type}'
