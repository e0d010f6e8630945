"""
Remote Config template update builder.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from trigger_adapter.handlers.cloud_function import CloudFunction, make_cloud_function
from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.models.context import Event
from trigger_adapter.models.options import DeploymentOptions, Handler, InvocationOptions
from trigger_adapter.providers.base import project_resource

PROVIDER = 'google.firebase.remoteconfig'
SERVICE = 'firebaseremoteconfig.googleapis.com'


class RemoteConfigUser(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    image_url: Optional[str] = None


class TemplateVersion(BaseModel):
    """Metadata of the Remote Config template version that was published."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra='allow')

    version_number: int
    update_time: Optional[str] = None
    update_user: Optional[RemoteConfigUser] = None
    description: Optional[str] = None
    update_origin: Optional[str] = None
    update_type: Optional[str] = None
    rollback_source: Optional[int] = None


def template_version_constructor(event: Event) -> TemplateVersion:
    return TemplateVersion.model_validate(event.data or {})


def trigger_resource(config: AdapterConfig) -> str:
    return project_resource(config)


def on_update(
    handler: Handler,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> CloudFunction:
    """Handle all updates, rollbacks included, that affect the project's template."""
    return make_cloud_function(InvocationOptions(
        provider=PROVIDER,
        service=SERVICE,
        event_type='update',
        trigger_resource=trigger_resource,
        data_constructor=template_version_constructor,
        handler=handler,
        deployment=deployment or DeploymentOptions(),
    ), config)
