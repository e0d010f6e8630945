"""
Trigger adapter.

Turns raw serverless invocation payloads into normalized ``(data, context)``
handler calls and describes, for deployment tooling, which events each
function receives:

- models: context, change, options and descriptor models
- logic: wire-format reconciliation, auth resolution, wildcard matching, descriptors
- handlers: the normalizer, the CloudFunction record and the runtime entry point
- providers: thin builders for each event source
"""

__version__ = "1.0.0"

from trigger_adapter.exceptions import (
    AdapterError,
    ConfigurationError,
    MalformedPayloadWarning,
    MissingProjectError,
    ParamsUnavailableError,
)
from trigger_adapter.handlers.models.env_vars import AdapterConfig, get_adapter_config
from trigger_adapter.models import (
    AuthRecord,
    AuthType,
    Change,
    DeploymentOptions,
    Event,
    EventContext,
    InvocationOptions,
    Resource,
    TriggerDescriptor,
)
from trigger_adapter.handlers.cloud_function import CloudFunction, EventNormalizer, make_cloud_function
from trigger_adapter.function_builder import FunctionBuilder, region, run_with
from trigger_adapter.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "AdapterConfig",
    "AdapterError",
    "AuthRecord",
    "AuthType",
    "Change",
    "CloudFunction",
    "ConfigurationError",
    "DeploymentOptions",
    "Event",
    "EventContext",
    "EventNormalizer",
    "FunctionBuilder",
    "InvocationOptions",
    "MalformedPayloadWarning",
    "MissingProjectError",
    "ParamsUnavailableError",
    "Resource",
    "TriggerDescriptor",
    "get_adapter_config",
    "logger",
    "make_cloud_function",
    "metrics",
    "region",
    "run_with",
    "tracer",
]
