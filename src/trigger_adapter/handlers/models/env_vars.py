"""
Environment variable models for type-safe adapter configuration.

The environment is read exactly once, when a function is composed, and turned
into an immutable ``AdapterConfig`` that is passed explicitly to the
normalizer. Nothing reads ``os.environ`` at invocation time.
"""

import json
from typing import Annotated, Optional
from urllib.parse import urlparse

from aws_lambda_env_modeler import BaseModel as BaseEnvModel, get_environment_variables
from pydantic import BaseModel, ConfigDict, Field


class AdapterEnvVars(BaseEnvModel):
    """Environment variables consumed by the trigger adapter."""

    # Project identifier used to resolve resource paths
    GCLOUD_PROJECT: Annotated[Optional[str], Field(
        description='Project identifier used when resolving trigger resources'
    )] = None

    # Dual-signature calling convention switch
    X_GOOGLE_NEW_FUNCTION_SIGNATURE: Annotated[str, Field(
        description='Invoke functions with (data, context) instead of a single raw event (true/false)',
        pattern=r'^(true|false)$'
    )] = 'false'

    # JSON blob carrying the default database URL
    FIREBASE_CONFIG: Annotated[Optional[str], Field(
        description='JSON project configuration, only databaseURL is read'
    )] = None

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        description='Service name for AWS Powertools'
    )] = 'trigger-adapter'

    # Log level for AWS Powertools Logger
    LOG_LEVEL: Annotated[str, Field(
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @property
    def new_function_signature(self) -> bool:
        """Check if the (data, context) calling convention is enabled."""
        return self.X_GOOGLE_NEW_FUNCTION_SIGNATURE.lower() == 'true'

    @property
    def database_url(self) -> Optional[str]:
        """Database URL from FIREBASE_CONFIG, if present and parseable."""
        if not self.FIREBASE_CONFIG:
            return None
        try:
            return json.loads(self.FIREBASE_CONFIG).get('databaseURL')
        except (ValueError, AttributeError):
            return None


class AdapterConfig(BaseModel):
    """Immutable configuration resolved once at composition time."""

    model_config = ConfigDict(frozen=True)

    project_id: Annotated[Optional[str], Field(
        description='Project identifier, required when a trigger resource is resolved'
    )] = None

    new_function_signature: Annotated[bool, Field(
        description='Whether functions are called as (data, context)'
    )] = False

    database_url: Annotated[Optional[str], Field(
        description='Default Realtime Database URL'
    )] = None

    @property
    def default_database_instance(self) -> Optional[str]:
        """Instance name derived from the database URL host."""
        if not self.database_url:
            return None
        host = urlparse(self.database_url).hostname or self.database_url
        return host.split('.')[0] or None

    @classmethod
    def from_env_vars(cls, env_vars: AdapterEnvVars) -> 'AdapterConfig':
        return cls(
            project_id=env_vars.GCLOUD_PROJECT or None,
            new_function_signature=env_vars.new_function_signature,
            database_url=env_vars.database_url,
        )


def get_adapter_env_vars() -> AdapterEnvVars:
    """
    Get typed environment variables for the adapter.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=AdapterEnvVars)


def get_adapter_config() -> AdapterConfig:
    """Resolve the adapter configuration from the process environment."""
    return AdapterConfig.from_env_vars(get_adapter_env_vars())
