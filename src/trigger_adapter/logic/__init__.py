"""
Normalization and descriptor logic.

- path_matcher: wildcard parameter extraction from resource paths
- auth_resolver: auth state classification for database invocations
- legacy_adapter: older wire formats converted to the canonical context
- trigger_builder: deployment options mapped to trigger descriptors
- paths: slash-delimited path and delta helpers
"""

from trigger_adapter.logic.path_matcher import extract_params, resolve_params
from trigger_adapter.logic.auth_resolver import detect_auth_type, make_auth
from trigger_adapter.logic.legacy_adapter import WireFormat, parse_raw, reconcile
from trigger_adapter.logic.trigger_builder import MEMORY_LOOKUP, build_trigger, opts_to_trigger

__all__ = [
    "MEMORY_LOOKUP",
    "WireFormat",
    "build_trigger",
    "detect_auth_type",
    "extract_params",
    "make_auth",
    "opts_to_trigger",
    "parse_raw",
    "reconcile",
    "resolve_params",
]
