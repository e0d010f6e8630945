"""
Provider builders.

Each module supplies the provider and service identifiers, the trigger
resource template and the typed payload constructor for one event source, and
hands them to ``make_cloud_function``.
"""

from trigger_adapter.providers import analytics, auth, database, firestore, pubsub, remote_config

__all__ = [
    'analytics',
    'auth',
    'database',
    'firestore',
    'pubsub',
    'remote_config',
]
