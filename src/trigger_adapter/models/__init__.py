"""
Data models for the trigger adapter.

This package contains the pydantic models and value types shared by the
normalizer, the descriptor builder and the provider builders.
"""

from trigger_adapter.models.context import (
    AuthRecord,
    AuthType,
    Event,
    EventContext,
    ParamsResult,
    Resolved,
    Resource,
    Unavailable,
)
from trigger_adapter.models.change import Change, apply_field_mask
from trigger_adapter.models.options import (
    SCHEDULED_LABEL,
    DeploymentOptions,
    InvocationOptions,
    Schedule,
    ScheduleRetryConfig,
)
from trigger_adapter.models.trigger import EventTrigger, TriggerDescriptor

__all__ = [
    "AuthRecord",
    "AuthType",
    "Change",
    "DeploymentOptions",
    "Event",
    "EventContext",
    "EventTrigger",
    "InvocationOptions",
    "ParamsResult",
    "Resolved",
    "Resource",
    "SCHEDULED_LABEL",
    "Schedule",
    "ScheduleRetryConfig",
    "TriggerDescriptor",
    "Unavailable",
    "apply_field_mask",
]
