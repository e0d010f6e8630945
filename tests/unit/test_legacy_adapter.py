"""
Unit tests for wire format detection and legacy reconciliation.
"""

import pytest

from trigger_adapter.logic.legacy_adapter import WireFormat, detect_wire_format, parse_raw, reconcile
from trigger_adapter.models.context import Resource
from trigger_adapter.models.options import InvocationOptions

LEGACY_CREATE = 'providers/cloud.firestore/eventTypes/document.create'


@pytest.fixture
def firestore_options() -> InvocationOptions:
    return InvocationOptions(
        provider='google.firestore',
        event_type='document.create',
        service='firestore.googleapis.com',
        legacy_event_type=LEGACY_CREATE,
        handler=lambda data, context: None,
    )


class TestParseRaw:
    """Test cases for parse_raw."""

    def test_current_format(self, current_format_event):
        """Test that the context envelope is used directly."""
        parsed = parse_raw(current_format_event)

        assert parsed.wire_format is WireFormat.CURRENT
        assert parsed.data == current_format_event['data']
        assert parsed.context['eventId'] == 'evt-123'

    def test_current_format_context_is_copied(self, current_format_event):
        """Test that later mutation cannot leak into the raw payload."""
        parsed = parse_raw(current_format_event)
        parsed.context['eventId'] = 'changed'

        assert current_format_event['context']['eventId'] == 'evt-123'

    def test_legacy_format_inlines_everything_but_data(self, legacy_format_event):
        """Test synthesis of the context from top-level fields."""
        parsed = parse_raw(legacy_format_event)

        assert parsed.wire_format is WireFormat.LEGACY
        assert 'data' not in parsed.context
        assert parsed.context['eventType'] == LEGACY_CREATE
        assert parsed.context['eventId'] == 'evt-456'

    def test_detect_wire_format(self):
        """Test that only the context key decides the shape."""
        assert detect_wire_format({'context': {}}) is WireFormat.CURRENT
        assert detect_wire_format({'data': 1}) is WireFormat.LEGACY


class TestReconcile:
    """Test cases for reconcile."""

    def test_legacy_event_type_is_rewritten(self, firestore_options):
        """Test the old Firestore create event becomes the new shape."""
        name = 'projects/p/databases/(default)/documents/users/abc'
        raw_context = {'eventType': LEGACY_CREATE, 'resource': name}

        reconciled = reconcile(raw_context, firestore_options)

        assert reconciled.context.event_type == 'google.firestore.document.create'
        assert reconciled.context.resource == Resource(service='firestore.googleapis.com', name=name)

    def test_current_event_type_untouched(self, firestore_options):
        """Test that new-style contexts pass through."""
        raw_context = {
            'eventType': 'google.firestore.document.create',
            'resource': {'service': 'firestore.googleapis.com', 'name': 'projects/p/x'},
        }

        reconciled = reconcile(raw_context, firestore_options)

        assert reconciled.context.event_type == 'google.firestore.document.create'
        assert reconciled.context.resource_name == 'projects/p/x'

    def test_other_legacy_type_untouched(self, firestore_options):
        """Test that only the builder's own legacy type is rewritten."""
        raw_context = {'eventType': 'providers/cloud.firestore/eventTypes/document.delete', 'resource': 'x/y'}

        reconciled = reconcile(raw_context, firestore_options)

        assert reconciled.context.event_type == 'providers/cloud.firestore/eventTypes/document.delete'
        assert reconciled.context.resource == 'x/y'

    def test_auth_and_params_are_split_out(self, firestore_options):
        """Test that raw auth and injected params are handed back separately."""
        raw_context = {'auth': {'admin': True}, 'params': {'id': '1'}, 'authType': 'ADMIN'}

        reconciled = reconcile(raw_context, firestore_options)

        assert reconciled.raw_auth == {'admin': True}
        assert reconciled.supplied_params == {'id': '1'}
        assert reconciled.context.auth is None
        assert reconciled.context.auth_type is None

    def test_unknown_fields_are_preserved(self, firestore_options):
        """Test that extra wire fields survive on the context."""
        reconciled = reconcile({'eventId': 'e1', 'custom': 'value'}, firestore_options)

        assert reconciled.context.event_id == 'e1'
        assert reconciled.context.to_wire()['custom'] == 'value'
