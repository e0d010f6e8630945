"""
Invocation normalizer and the CloudFunction record.

``make_cloud_function`` turns declarative ``InvocationOptions`` into a
``CloudFunction``: a callable that accepts a raw invocation and returns an
awaitable of the user handler's result, paired with the trigger descriptor
deployment tooling reads and the undecorated handler for direct testing.

Invocation order:
1. Legacy wire formats are reconciled into the canonical context.
2. Database invocations get ``auth_type``/``auth`` resolved.
3. ``context.params`` is resolved, or marked unavailable for namespace-only builders.
4. The ``before`` hook runs.
5. The handler runs, with the typed payload or, for scheduled functions, the context only.
6. The ``after`` hook runs exactly once, on success, failure or cancellation,
   and the original result or error is propagated unchanged.

Steps 1 to 4 run synchronously inside ``__call__``; resolution errors raise
there, before the handler is touched.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from aws_lambda_powertools.metrics import MetricUnit

from trigger_adapter.exceptions import MalformedPayloadWarning
from trigger_adapter.handlers.models.env_vars import AdapterConfig, get_adapter_config
from trigger_adapter.handlers.utils.observability import logger, metrics, tracer
from trigger_adapter.logic import auth_resolver
from trigger_adapter.logic.legacy_adapter import parse_raw, reconcile
from trigger_adapter.logic.path_matcher import resolve_params
from trigger_adapter.logic.trigger_builder import build_trigger
from trigger_adapter.models.context import Event, EventContext, Unavailable
from trigger_adapter.models.options import InvocationOptions
from trigger_adapter.models.trigger import TriggerDescriptor

NAMESPACE_PARAMS_REASON = 'context.params is not available when using the handler namespace.'


class EventNormalizer:
    """Turns raw invocations into ``(data, context)`` handler calls."""

    def __init__(self, options: InvocationOptions, config: AdapterConfig):
        """
        Initialize the normalizer.

        Args:
            options: Immutable function options
            config: Configuration resolved at composition time
        """
        self.options = options
        self.config = config

    def __call__(self, *args: Any) -> Awaitable[Any]:
        """Invoke with ``(raw)``, or ``(data, context)`` when the new signature is enabled."""
        if self.config.new_function_signature:
            data, context = args
            return self.invoke_with_context(data, context)
        (raw,) = args
        return self.invoke_raw(raw)

    def invoke_raw(self, raw: Dict[str, Any]) -> Awaitable[Any]:
        """Invoke with a single raw event in either wire format."""
        parsed = parse_raw(raw or {})
        logger.debug("Parsed raw invocation", extra={"wire_format": parsed.wire_format.value})
        return self.invoke_with_context(parsed.data, parsed.context)

    def invoke_with_context(self, data: Any, context: Dict[str, Any]) -> Awaitable[Any]:
        """Invoke with the payload and raw context fields already separated."""
        event = self.normalize(data, context or {})
        self.options.before(event)
        return self._settle(event)

    @tracer.capture_method
    def normalize(self, data: Any, raw_context: Dict[str, Any]) -> Event:
        """
        Build the canonical event for one invocation.

        Raises:
            ConfigurationError: If the trigger resource cannot be resolved
        """
        reconciled = reconcile(raw_context, self.options)
        context = reconciled.context

        updates: Dict[str, Any] = {}
        if auth_resolver.applies_to(self.options.provider):
            auth_type = auth_resolver.detect_auth_type(reconciled.raw_auth)
            updates['auth_type'] = auth_type
            updates['auth'] = auth_resolver.make_auth(reconciled.raw_auth, auth_type)

        if self.options.trigger_resource(self.config) is None:
            updates['params_result'] = Unavailable(reason=NAMESPACE_PARAMS_REASON)
        else:
            updates['params_result'] = resolve_params(
                context,
                self.options.trigger_resource,
                self.config,
                supplied=reconciled.supplied_params,
            )

        context = context.model_copy(update=updates)
        logger.debug(
            "Normalized invocation",
            extra={
                "event_id": context.event_id,
                "event_type": context.event_type,
                "resource": context.resource_name,
                "auth_type": context.auth_type.value if context.auth_type else None,
            },
        )
        return Event(data=data, context=context)

    async def _settle(self, event: Event) -> Any:
        """Run the handler and the ``after`` hook, propagating the original outcome."""
        try:
            result = self._dispatch(event)
            if result is None:
                logger.warning(
                    "Function returned None, expected an awaitable or value",
                    extra={"category": MalformedPayloadWarning.__name__, "event_id": event.context.event_id},
                )
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            metrics.add_metric(name="InvocationError", unit=MetricUnit.Count, value=1)
            logger.error(
                "Function failed",
                extra={"event_id": event.context.event_id, "error": str(exc), "error_type": type(exc).__name__},
            )
            raise
        else:
            metrics.add_metric(name="InvocationSuccess", unit=MetricUnit.Count, value=1)
            return result
        finally:
            # Also reached on cancellation, e.g. a caller-side timeout
            self.options.after(event)

    def _dispatch(self, event: Event) -> Any:
        if self.options.is_scheduled:
            # Scheduled functions carry no meaningful payload
            return self.options.context_only_handler(event.context)
        data_or_change = self.options.data_constructor(event)
        return self.options.handler(data_or_change, event.context)


@dataclass(frozen=True)
class CloudFunction:
    """A normalized invocation handler paired with its deployment metadata."""

    options: InvocationOptions
    config: AdapterConfig
    invoke: EventNormalizer

    def __call__(self, *args: Any) -> Awaitable[Any]:
        return self.invoke(*args)

    @property
    def run(self) -> Callable[..., Any]:
        """The undecorated handler, for calling without normalization."""
        return self.options.handler or self.options.context_only_handler

    @property
    def descriptor(self) -> TriggerDescriptor:
        """Trigger descriptor, recomputed from the immutable options on each read."""
        return build_trigger(self.options, self.config)

    @property
    def trigger(self) -> Dict[str, Any]:
        """Serialized trigger descriptor as read by deployment tooling."""
        return self.descriptor.to_dict()


def make_cloud_function(options: InvocationOptions, config: Optional[AdapterConfig] = None) -> CloudFunction:
    """
    Compose a CloudFunction from options.

    Args:
        options: Function options built by a provider builder
        config: Adapter configuration; read from the environment when omitted

    Returns:
        CloudFunction ready to be invoked and described
    """
    if config is None:
        config = get_adapter_config()
    return CloudFunction(options=options, config=config, invoke=EventNormalizer(options, config))
