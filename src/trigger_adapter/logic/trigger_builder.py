"""
Trigger descriptor synthesis.

Pure functions from declarative options to a ``TriggerDescriptor``. Nothing
here invokes a handler, and identical options always yield an identical
descriptor.
"""

from types import MappingProxyType
from typing import Any, Dict

from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.handlers.utils.observability import tracer
from trigger_adapter.models.options import DeploymentOptions, InvocationOptions
from trigger_adapter.models.trigger import EventTrigger, TriggerDescriptor

MEMORY_LOOKUP = MappingProxyType({
    '128MB': 128,
    '256MB': 256,
    '512MB': 512,
    '1GB': 1024,
    '2GB': 2048,
})


def opts_to_trigger(deployment: DeploymentOptions) -> Dict[str, Any]:
    """
    Map deployment options to descriptor fields.

    Unset or falsy options are left out. An unrecognized memory value is
    dropped rather than rejected.
    """
    trigger: Dict[str, Any] = {}
    if deployment.regions:
        trigger['regions'] = list(deployment.regions)
    if deployment.timeout_seconds:
        trigger['timeout'] = f'{deployment.timeout_seconds}s'
    if deployment.memory:
        memory_mb = MEMORY_LOOKUP.get(deployment.memory)
        if memory_mb is not None:
            trigger['available_memory_mb'] = memory_mb
    if deployment.schedule:
        trigger['schedule'] = deployment.schedule
    return trigger


@tracer.capture_method
def build_trigger(options: InvocationOptions, config: AdapterConfig) -> TriggerDescriptor:
    """
    Build the descriptor for a function.

    Returns an empty descriptor for namespace-only builders, whose trigger
    resource resolves to None.

    Raises:
        ConfigurationError: If the trigger resource needs a project id that is not configured
    """
    resource = options.trigger_resource(config)
    if resource is None:
        return TriggerDescriptor()

    fields = opts_to_trigger(options.deployment)
    fields['event_trigger'] = EventTrigger(
        resource=resource,
        event_type=options.legacy_event_type or options.full_event_type,
        service=options.service,
    )
    if options.labels:
        fields['labels'] = dict(options.labels)
    return TriggerDescriptor(**fields)
