"""
Classification of the authentication state of database invocations.
"""

from typing import Any, Mapping, Optional

from trigger_adapter.models.context import AuthRecord, AuthType

# Only this provider family ships auth state on the invocation
DATABASE_PROVIDER = 'google.firebase.database'


def detect_auth_type(raw_auth: Optional[Mapping[str, Any]]) -> AuthType:
    """
    Classify the raw ``context.auth`` record.

    A truthy ``admin`` flag wins; otherwise any ``variable`` record, even an
    empty one, marks a user; anything else is unauthenticated.
    """
    if not isinstance(raw_auth, Mapping):
        return AuthType.UNAUTHENTICATED
    if raw_auth.get('admin'):
        return AuthType.ADMIN
    if 'variable' in raw_auth:
        return AuthType.USER
    return AuthType.UNAUTHENTICATED


def make_auth(raw_auth: Optional[Mapping[str, Any]], auth_type: AuthType) -> Optional[AuthRecord]:
    """Extract the identity for ``auth_type``; ADMIN and UNAUTHENTICATED carry none."""
    if auth_type is not AuthType.USER:
        return None
    variable = raw_auth.get('variable') or {}
    return AuthRecord(uid=variable.get('uid'), token=variable.get('token'))


def applies_to(provider: str) -> bool:
    """Check if auth resolution runs for ``provider``."""
    return provider == DATABASE_PROVIDER
