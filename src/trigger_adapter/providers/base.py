"""
Helpers shared by provider builders.
"""

from typing import Optional

from trigger_adapter.exceptions import MissingProjectError
from trigger_adapter.handlers.models.env_vars import AdapterConfig


def require_project(config: AdapterConfig) -> str:
    """
    Project id a trigger resource is built from.

    Raises:
        MissingProjectError: If no project id is configured
    """
    if not config.project_id:
        raise MissingProjectError()
    return config.project_id


def legacy_event_type(legacy_provider: str, event_type: str) -> str:
    """Older event type identifier, e.g. providers/cloud.firestore/eventTypes/document.create."""
    return f'providers/{legacy_provider}/eventTypes/{event_type}'


def project_resource(config: AdapterConfig, suffix: Optional[str] = None) -> str:
    """``projects/<id>`` optionally followed by ``suffix``."""
    resource = f'projects/{require_project(config)}'
    return f'{resource}/{suffix}' if suffix else resource
