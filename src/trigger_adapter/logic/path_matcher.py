"""
Resource path wildcard matching.

A trigger resource template such as ``users/{userId}/posts/{postId}`` binds
each brace-delimited segment to the segment at the same position of the
concrete resource name that fired the event.
"""

import re
from typing import Dict, List, Optional

from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.handlers.utils.observability import logger
from trigger_adapter.models.context import EventContext, Resolved
from trigger_adapter.models.options import TriggerResource

WILDCARD_REGEX = re.compile(r'{[^/{}]*}')


def find_wildcards(template: str) -> List[str]:
    """Return the wildcard segments of a template, braces included."""
    return WILDCARD_REGEX.findall(template)


def extract_params(template: str, resource_name: str) -> Dict[str, Optional[str]]:
    """
    Bind wildcard names in ``template`` to segments of ``resource_name``.

    Non-wildcard segments are not compared; correspondence is positional only.

    Args:
        template: Slash-delimited template, possibly containing ``{name}`` segments
        resource_name: Concrete slash-delimited resource name

    Returns:
        Mapping from bare wildcard name to the matched segment, None where the
        concrete name has no segment at that position
    """
    wildcards = find_wildcards(template)
    if not wildcards:
        return {}

    template_parts = template.split('/')
    resource_parts = resource_name.split('/')
    params: Dict[str, Optional[str]] = {}
    for wildcard in wildcards:
        position = template_parts.index(wildcard) if wildcard in template_parts else -1
        if 0 <= position < len(resource_parts):
            params[wildcard[1:-1]] = resource_parts[position]
        else:
            params[wildcard[1:-1]] = None
    return params


def resolve_params(
    context: EventContext,
    trigger_resource: TriggerResource,
    config: AdapterConfig,
    supplied: Optional[Dict[str, Optional[str]]] = None,
) -> Resolved:
    """
    Compute ``context.params`` for a builder that has a trigger resource.

    Params passed in directly on the invocation win, which lets tests inject
    them. A context without a resource yields an empty mapping.

    Raises:
        ConfigurationError: If the template needs a project id that is not configured
    """
    if supplied is not None:
        return Resolved(params=dict(supplied))

    resource_name = context.resource_name
    if not resource_name:
        logger.debug("No resource on context, params left empty")
        return Resolved()

    template = trigger_resource(config) or ''
    return Resolved(params=extract_params(template, resource_name))
