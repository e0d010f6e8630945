"""
Cloud Pub/Sub topic and schedule builders.
"""

import base64
import json
from typing import Any, Dict, Optional

from trigger_adapter.exceptions import ConfigurationError
from trigger_adapter.handlers.cloud_function import CloudFunction, make_cloud_function
from trigger_adapter.handlers.models.env_vars import AdapterConfig
from trigger_adapter.models.context import Event
from trigger_adapter.models.options import (
    SCHEDULED_LABEL,
    ContextOnlyHandler,
    DeploymentOptions,
    Handler,
    InvocationOptions,
    Schedule,
    ScheduleRetryConfig,
)
from trigger_adapter.providers.base import project_resource

PROVIDER = 'google.pubsub'
SERVICE = 'pubsub.googleapis.com'
PUBLISH_EVENT = 'topic.publish'

_UNSET = object()


class Message:
    """
    A Pub/Sub message.

    ``json`` decodes the base64 payload as JSON on first access and raises if
    the payload is not base64-encoded JSON.
    """

    def __init__(self, data: Optional[Dict[str, Any]]):
        data = data or {}
        self.data: Optional[str] = data.get('data')
        self.attributes: Dict[str, str] = data.get('attributes') or {}
        self._json: Any = data.get('json', _UNSET)

    @property
    def json(self) -> Any:
        if self._json is _UNSET:
            self._json = json.loads(base64.b64decode(self.data or '').decode('utf-8'))
        return self._json

    def to_json(self) -> Dict[str, Any]:
        return {'data': self.data, 'attributes': self.attributes}


def message_constructor(event: Event) -> Message:
    return Message(event.data)


class TopicBuilder:
    """Builder for functions fired by messages published to a topic."""

    def __init__(self, topic: str, deployment: DeploymentOptions, config: Optional[AdapterConfig] = None):
        self.topic = topic
        self.deployment = deployment
        self.config = config

    def trigger_resource(self, config: AdapterConfig) -> str:
        return project_resource(config, f'topics/{self.topic}')

    def on_publish(self, handler: Handler) -> CloudFunction:
        """Handle a message published to the topic."""
        return make_cloud_function(InvocationOptions(
            provider=PROVIDER,
            service=SERVICE,
            event_type=PUBLISH_EVENT,
            trigger_resource=self.trigger_resource,
            data_constructor=message_constructor,
            handler=handler,
            deployment=self.deployment,
        ), self.config)


class ScheduleBuilder:
    """Builder for functions fired on a time-based schedule."""

    def __init__(self, schedule: Schedule, deployment: DeploymentOptions, config: Optional[AdapterConfig] = None):
        self.schedule = schedule
        self.deployment = deployment
        self.config = config

    def retry_config(self, retry_config: ScheduleRetryConfig) -> 'ScheduleBuilder':
        return ScheduleBuilder(
            self.schedule.model_copy(update={'retry_config': retry_config}), self.deployment, self.config
        )

    def time_zone(self, time_zone: str) -> 'ScheduleBuilder':
        return ScheduleBuilder(
            self.schedule.model_copy(update={'time_zone': time_zone}), self.deployment, self.config
        )

    @staticmethod
    def trigger_resource(config: AdapterConfig) -> str:
        # Deployment tooling appends the topic name for the region and function
        return project_resource(config, 'topics')

    def on_run(self, handler: ContextOnlyHandler) -> CloudFunction:
        """Run ``handler(context)`` on every tick of the schedule."""
        return make_cloud_function(InvocationOptions(
            provider=PROVIDER,
            service=SERVICE,
            event_type=PUBLISH_EVENT,
            trigger_resource=self.trigger_resource,
            context_only_handler=handler,
            deployment=self.deployment.model_copy(update={'schedule': self.schedule}),
            labels={SCHEDULED_LABEL: 'true'},
        ), self.config)


def topic(
    name: str,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> TopicBuilder:
    """
    Select the topic to listen to.

    Raises:
        ConfigurationError: If the topic name contains a slash
    """
    if '/' in name:
        raise ConfigurationError('Topic name may not have a /', details={'topic': name})
    return TopicBuilder(name, deployment or DeploymentOptions(), config)


def schedule(
    expression: str,
    deployment: Optional[DeploymentOptions] = None,
    config: Optional[AdapterConfig] = None,
) -> ScheduleBuilder:
    """Select the schedule, e.g. ``every 5 minutes``."""
    return ScheduleBuilder(Schedule(schedule=expression), deployment or DeploymentOptions(), config)
