"""Tests for the event directory.

Covers:
- Event create / list / get
- Authorization hook — anonymous callers cannot create events
- Date parsing (ISO-8601, datetime-local, timezone normalisation)
- Scoped listings ordered by date
- Active-event selection on the session context
"""
from datetime import datetime, timedelta, timezone

import pytest

from request_hub.errors import AuthError, NotFoundError, ValidationError
from request_hub.services import event_service
from tests.conftest import create_test_event, organizer, submit_test_request


class TestEventCreate:
    """Event creation and validation."""

    def test_create_event(self, client):
        identity, headers = organizer(client)
        event = create_test_event(client, headers, name="Warehouse Party", description="Bring earplugs")
        assert event["name"] == "Warehouse Party"
        assert event["description"] == "Bring earplugs"
        assert event["organizer_id"] == identity["user_id"]
        assert event["accepting_requests"] is True

    def test_create_event_requires_login(self, client):
        resp = client.post("/api/events/", json={
            "name": "No Owner",
            "date": "2030-01-01T20:00:00Z",
        })
        assert resp.status_code == 401

    def test_create_event_form_field_names(self, client):
        """Front-end form ids map onto event attributes."""
        _, headers = organizer(client)
        resp = client.post("/api/events/", headers=headers, json={
            "eventName": "Rooftop",
            "eventDate": "2030-06-01T21:30",
            "eventDescription": "Sunset set",
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Rooftop"
        assert data["description"] == "Sunset set"

    def test_empty_name_rejected(self, client):
        _, headers = organizer(client)
        resp = client.post("/api/events/", headers=headers, json={
            "name": "   ",
            "date": "2030-01-01T20:00:00Z",
        })
        assert resp.status_code == 422

    def test_bad_date_rejected(self, client):
        _, headers = organizer(client)
        resp = client.post("/api/events/", headers=headers, json={
            "name": "Sometime",
            "date": "next friday",
        })
        assert resp.status_code == 422

    def test_out_of_range_date_rejected(self, client):
        """A timestamp that cannot be shifted to UTC is a validation error."""
        _, headers = organizer(client)
        resp = client.post("/api/events/", headers=headers, json={
            "name": "Year One",
            "date": "0001-01-01T00:00:00+05:00",
        })
        assert resp.status_code == 422

    def test_overlong_name_rejected(self, client):
        _, headers = organizer(client)
        resp = client.post("/api/events/", headers=headers, json={
            "name": "x" * 256,
            "date": "2030-01-01T20:00:00Z",
        })
        assert resp.status_code == 422

    def test_missing_date_rejected(self, organizer_ctx):
        with pytest.raises(ValidationError):
            event_service.create_event(organizer_ctx, "No Date", None)

    def test_anonymous_context_rejected(self, anon_ctx):
        with pytest.raises(AuthError):
            event_service.create_event(anon_ctx, "Ghost", "2030-01-01T20:00:00Z")

    def test_created_event_listed_once(self, organizer_ctx):
        event = event_service.create_event(organizer_ctx, "Once", "2030-01-01T20:00:00Z")
        ids = [e.id for e in event_service.list_events(organizer_ctx, "all")]
        assert ids.count(event.id) == 1

    def test_create_appends_to_loaded_listing(self, organizer_ctx):
        """The in-memory listing grows without being re-sorted."""
        event_service.create_event(organizer_ctx, "Later", "2030-05-01T20:00:00Z")
        event_service.list_events(organizer_ctx)
        earlier = event_service.create_event(organizer_ctx, "Earlier", "2030-01-01T20:00:00Z")
        assert organizer_ctx.events[-1] is earlier
        assert [e.name for e in event_service.list_events(organizer_ctx)] == ["Earlier", "Later"]


class TestDateParsing:
    """parse_event_date normalises everything to UTC."""

    def test_zulu_suffix(self):
        parsed = event_service.parse_event_date("2030-01-01T20:00:00Z")
        assert parsed == datetime(2030, 1, 1, 20, 0, tzinfo=timezone.utc)

    def test_offset_converted(self):
        parsed = event_service.parse_event_date("2030-01-01T20:00:00+02:00")
        assert parsed == datetime(2030, 1, 1, 18, 0, tzinfo=timezone.utc)

    def test_naive_uses_default_timezone(self, monkeypatch):
        monkeypatch.setattr(event_service.settings, "DEFAULT_TIMEZONE", "America/New_York")
        parsed = event_service.parse_event_date("2030-01-01T20:00")
        assert parsed == datetime(2030, 1, 2, 1, 0, tzinfo=timezone.utc)

    def test_naive_edge_of_range_rejected(self, monkeypatch):
        monkeypatch.setattr(event_service.settings, "DEFAULT_TIMEZONE", "Asia/Tokyo")
        with pytest.raises(ValidationError):
            event_service.parse_event_date("0001-01-01T00:00:00")

    def test_datetime_passthrough(self):
        value = datetime(2030, 1, 1, 20, 0, tzinfo=timezone.utc)
        assert event_service.parse_event_date(value) == value

    @pytest.mark.parametrize("value", [
        "", "   ", "2030-13-45", "tomorrow", None,
        "0001-01-01T00:00:00+05:00", "9999-12-31T23:59:59-05:00",
    ])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            event_service.parse_event_date(value)


class TestEventList:
    """Listing scopes and ordering."""

    def test_list_ordered_by_date(self, client):
        _, headers = organizer(client)
        create_test_event(client, headers, name="Third", days_ahead=30)
        create_test_event(client, headers, name="First", days_ahead=1)
        create_test_event(client, headers, name="Second", days_ahead=10)

        resp = client.get("/api/events/")
        assert resp.status_code == 200
        assert [e["name"] for e in resp.json()] == ["First", "Second", "Third"]

    def test_list_mine(self, client):
        _, headers_a = organizer(client, email="a@example.com")
        _, headers_b = organizer(client, email="b@example.com")
        create_test_event(client, headers_a, name="A's Gig")
        create_test_event(client, headers_b, name="B's Gig")

        resp = client.get("/api/events/?scope=mine", headers=headers_a)
        assert [e["name"] for e in resp.json()] == ["A's Gig"]

        resp = client.get("/api/events/?scope=all")
        assert len(resp.json()) == 2

    def test_list_mine_requires_login(self, client):
        resp = client.get("/api/events/?scope=mine")
        assert resp.status_code == 401

    def test_unknown_scope(self, client):
        resp = client.get("/api/events/?scope=everything")
        assert resp.status_code == 422

    def test_past_event_not_accepting(self, client):
        _, headers = organizer(client)
        create_test_event(client, headers, name="Last Week", days_ahead=-7)
        event = client.get("/api/events/").json()[0]
        assert event["accepting_requests"] is False


class TestEventGet:
    """Single event lookup."""

    def test_get_event_with_count(self, client):
        _, headers = organizer(client)
        event = create_test_event(client, headers)
        submit_test_request(client, event["id"])
        submit_test_request(client, event["id"])

        resp = client.get(f"/api/events/{event['id']}")
        assert resp.status_code == 200
        assert resp.json()["request_count"] == 2

    def test_get_event_not_found(self, client):
        resp = client.get("/api/events/00000000-0000-0000-0000-000000000000")
        assert resp.status_code == 404


class TestActiveEvent:
    """Active-event selection lives on the context."""

    def test_defaults_to_first_by_date(self, organizer_ctx):
        event_service.create_event(organizer_ctx, "Later", "2030-05-01T20:00:00Z")
        first = event_service.create_event(organizer_ctx, "Sooner", "2030-01-01T20:00:00Z")

        active = event_service.select_active_event(organizer_ctx)
        assert active.id == first.id
        assert organizer_ctx.active_event is active

    def test_select_by_id(self, organizer_ctx):
        event_service.create_event(organizer_ctx, "Sooner", "2030-01-01T20:00:00Z")
        later = event_service.create_event(organizer_ctx, "Later", "2030-05-01T20:00:00Z")
        assert event_service.select_active_event(organizer_ctx, later.id).id == later.id

    def test_none_when_empty(self, anon_ctx):
        assert event_service.select_active_event(anon_ctx) is None

    def test_unknown_id(self, anon_ctx):
        with pytest.raises(NotFoundError):
            event_service.select_active_event(anon_ctx, "missing")

    def test_mine_scope_rejects_foreign_event(self, db, organizer_ctx):
        from request_hub.context import SessionContext
        from request_hub.services import auth_service

        other = auth_service.register(db, "other@example.com", "pw", "pw")
        other_ctx = SessionContext(db=db, identity=other)
        foreign = event_service.create_event(other_ctx, "Not Yours", "2030-01-01T20:00:00Z")

        with pytest.raises(AuthError):
            event_service.select_active_event(organizer_ctx, foreign.id, scope="mine")


def test_is_accepting_requests_boundary():
    from request_hub.models.event import Event

    now = datetime(2030, 1, 1, tzinfo=timezone.utc)
    assert event_service.is_accepting_requests(Event(date=now), now=now)
    assert not event_service.is_accepting_requests(Event(date=now - timedelta(seconds=1)), now=now)
