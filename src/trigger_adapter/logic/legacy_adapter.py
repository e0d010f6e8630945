"""
Reconciliation of older invocation wire formats.

Two shapes reach a function. The current one wraps event metadata in a
``context`` envelope next to ``data``; the older one inlines the metadata at
the top level. Older event flows also use provider-specific event type names
and a bare resource string. Everything is converted to a single canonical
``EventContext`` here, before any other normalization step runs.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from trigger_adapter.handlers.utils.observability import logger
from trigger_adapter.models.context import EventContext, Resource
from trigger_adapter.models.options import InvocationOptions


class WireFormat(str, Enum):
    """Shape of a raw invocation."""

    LEGACY = 'legacy'
    CURRENT = 'current'


@dataclass
class ParsedInvocation:
    """Raw invocation split into payload and context fields."""

    wire_format: WireFormat
    data: Any
    context: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ReconciledContext:
    """Canonical context plus the raw fields later steps interpret."""

    context: EventContext
    raw_auth: Optional[Any] = None
    supplied_params: Optional[Dict[str, Optional[str]]] = None


def detect_wire_format(raw: Mapping[str, Any]) -> WireFormat:
    """A ``context`` key marks the current shape."""
    return WireFormat.CURRENT if 'context' in raw else WireFormat.LEGACY


def parse_raw(raw: Mapping[str, Any]) -> ParsedInvocation:
    """Split a single-argument invocation into data and context fields."""
    wire_format = detect_wire_format(raw)
    if wire_format is WireFormat.CURRENT:
        context = copy.deepcopy(dict(raw.get('context') or {}))
    else:
        context = {key: copy.deepcopy(value) for key, value in raw.items() if key != 'data'}
    return ParsedInvocation(wire_format=wire_format, data=raw.get('data'), context=context)


def reconcile(context: Mapping[str, Any], options: InvocationOptions) -> ReconciledContext:
    """
    Build the canonical context for ``options`` from raw context fields.

    When the invocation carries the builder's legacy event type, the event
    type is rewritten to ``provider.eventType`` and the bare resource string
    becomes a ``{service, name}`` record.
    """
    fields = dict(context)
    raw_auth = fields.pop('auth', None)
    supplied_params = fields.pop('params', None)
    fields.pop('authType', None)
    fields.pop('auth_type', None)

    if options.legacy_event_type and fields.get('eventType') == options.legacy_event_type:
        logger.debug(
            "Rewriting legacy event type",
            extra={"legacy_event_type": options.legacy_event_type, "event_type": options.full_event_type},
        )
        fields['eventType'] = options.full_event_type
        resource = fields.get('resource')
        if isinstance(resource, str):
            fields['resource'] = Resource(service=options.service, name=resource)

    return ReconciledContext(
        context=EventContext.model_validate(fields),
        raw_auth=raw_auth,
        supplied_params=supplied_params,
    )
