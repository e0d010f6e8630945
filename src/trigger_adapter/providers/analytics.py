"""
Analytics conversion event builder.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from trigger_adapter.handlers.cloud_function import CloudFunction, make_cloud_function
from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.models.context import Event
from trigger_adapter.models.options import DeploymentOptions, Handler, InvocationOptions
from trigger_adapter.providers.base import legacy_event_type, project_resource

PROVIDER = 'google.analytics'
SERVICE = 'app-measurement.com'
LEGACY_PROVIDER = 'google.firebase.analytics'
LOG_EVENT = 'event.log'

_TYPED_VALUE_KEYS = ('stringValue', 'intValue', 'floatValue', 'doubleValue')


def unwrap_value(value: Mapping[str, Any]) -> Any:
    """Unwrap a typed analytics parameter such as ``{'intValue': '3'}``."""
    for key in _TYPED_VALUE_KEYS:
        if key in value:
            raw = value[key]
            if key == 'intValue':
                return int(raw)
            if key in ('floatValue', 'doubleValue'):
                return float(raw)
            return raw
    return None


def _micros_to_iso(micros: Any) -> Optional[str]:
    if micros in (None, ''):
        return None
    return datetime.fromtimestamp(int(micros) / 1_000_000, tz=timezone.utc).isoformat()


class AnalyticsEvent(BaseModel):
    """A logged analytics event and the user that logged it."""

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    params: Dict[str, Any] = {}
    reported_at: Optional[str] = None
    logged_at: Optional[str] = None
    value_in_usd: Optional[float] = None
    user: Dict[str, Any] = {}

    @classmethod
    def from_wire(cls, wire_data: Optional[Mapping[str, Any]]) -> 'AnalyticsEvent':
        wire_data = wire_data or {}
        event_dims = wire_data.get('eventDim') or [{}]
        event_dim = event_dims[0]
        return cls(
            name=event_dim.get('name'),
            params={name: unwrap_value(value) for name, value in (event_dim.get('params') or {}).items()},
            reported_at=_micros_to_iso(event_dim.get('timestampMicros')),
            logged_at=_micros_to_iso(event_dim.get('previousTimestampMicros')),
            value_in_usd=event_dim.get('valueInUsd'),
            user=dict(wire_data.get('userDim') or {}),
        )


def analytics_event_constructor(event: Event) -> AnalyticsEvent:
    return AnalyticsEvent.from_wire(event.data)


class AnalyticsEventBuilder:
    """Builder for functions fired by one analytics event type."""

    def __init__(self, event_name: str, deployment: DeploymentOptions, config: Optional[AdapterConfig] = None):
        self.event_name = event_name
        self.deployment = deployment
        self.config = config

    def trigger_resource(self, config: AdapterConfig) -> str:
        return project_resource(config, f'events/{self.event_name}')

    def on_log(self, handler: Handler) -> CloudFunction:
        """Fire every time the analytics event is logged."""
        return make_cloud_function(InvocationOptions(
            provider=PROVIDER,
            service=SERVICE,
            event_type=LOG_EVENT,
            trigger_resource=self.trigger_resource,
            legacy_event_type=legacy_event_type(LEGACY_PROVIDER, LOG_EVENT),
            data_constructor=analytics_event_constructor,
            handler=handler,
            deployment=self.deployment,
        ), self.config)


def event(
    name: str,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> AnalyticsEventBuilder:
    """Select the analytics event type to listen to."""
    return AnalyticsEventBuilder(name, deployment or DeploymentOptions(), config)
