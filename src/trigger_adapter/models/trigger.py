"""
Trigger descriptor models.

The descriptor is the JSON record deployment tooling reads to learn where a
function runs and which events it receives. Unset fields are omitted from
the serialized form, never emitted with a zero value.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from trigger_adapter.models.options import Schedule


class EventTrigger(BaseModel):
    """Event source a function listens to."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    resource: str
    event_type: str
    service: str


class TriggerDescriptor(BaseModel):
    """Deployment-time description of a function."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    regions: Optional[List[str]] = None
    timeout: Optional[str] = None
    available_memory_mb: Optional[int] = None
    schedule: Optional[Union[str, Schedule]] = None
    event_trigger: Optional[EventTrigger] = None
    labels: Optional[Dict[str, str]] = None

    @property
    def is_deployable(self) -> bool:
        """A descriptor without an event trigger belongs to a namespace-only builder."""
        return self.event_trigger is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase record consumed by deployment tooling."""
        return self.model_dump(by_alias=True, exclude_none=True, mode='json')
