"""
Tests for event, organizer and guest endpoints.
"""
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework import status

from apps.events.models import Event, EventGuest, EventOrganizer
from tests.factories import EventFactory, EventGuestFactory, EventOrganizerFactory, UserFactory


def iso(delta):
    return (timezone.now() + delta).isoformat()


def upcoming_event(**kwargs):
    kwargs.setdefault('start_time', timezone.now() + timedelta(days=1))
    kwargs.setdefault('end_time', timezone.now() + timedelta(days=2))
    return EventFactory(**kwargs)


@pytest.mark.django_db
class TestEventCreate:

    def test_manager_creates_unpublished_event(self, client_for, manager):
        payload = {
            'name': 'Games Night',
            'description': 'Board games',
            'location': 'BA 1234',
            'startTime': iso(timedelta(days=1)),
            'endTime': iso(timedelta(days=1, hours=3)),
            'capacity': 20,
            'points': 500,
        }
        response = client_for(manager).post('/events', payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['pointsRemain'] == 500
        assert response.data['pointsAwarded'] == 0
        assert response.data['published'] is False
        assert response.data['organizers'] == [] and response.data['guests'] == []

    @pytest.mark.parametrize('overrides', [
        {'points': 0},
        {'points': '100'},
        {'capacity': 0},
        {'endTime': iso(timedelta(hours=1))},
    ])
    def test_invalid_events(self, client_for, manager, overrides):
        payload = {
            'name': 'Bad', 'description': 'Bad', 'location': 'Nowhere',
            'startTime': iso(timedelta(days=1)), 'endTime': iso(timedelta(days=2)), 'points': 10,
        }
        payload.update(overrides)
        assert client_for(manager).post('/events', payload, format='json').status_code == 400


@pytest.mark.django_db
class TestEventList:

    def test_regular_users_see_published_events_with_room(self, client_for, regular_user):
        open_event = EventFactory(capacity=2)
        full_event = EventFactory(capacity=1)
        EventGuestFactory(event=full_event)
        EventFactory(published=False)
        client = client_for(regular_user)

        response = client.get('/events')
        assert [row['id'] for row in response.data['results']] == [open_event.id]
        assert 'pointsRemain' not in response.data['results'][0]

        response = client.get('/events', {'showFull': 'true'})
        assert [row['id'] for row in response.data['results']] == [open_event.id, full_event.id]
        assert response.data['results'][1]['numGuests'] == 1

    def test_manager_published_filter(self, client_for, manager):
        EventFactory()
        draft = EventFactory(published=False)
        response = client_for(manager).get('/events', {'published': 'false'})
        assert [row['id'] for row in response.data['results']] == [draft.id]
        assert response.data['results'][0]['pointsRemain'] == 100

    def test_started_and_ended_together(self, client_for, regular_user):
        response = client_for(regular_user).get('/events', {'started': 'true', 'ended': 'true'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestEventDetail:

    def test_shapes_by_role(self, client_for, regular_user, manager):
        event = EventFactory()
        organizer = EventOrganizerFactory(event=event).user

        public = client_for(regular_user).get(f'/events/{event.id}').data
        assert 'guests' not in public and 'pointsRemain' not in public
        assert public['organizers'][0]['utorid'] == organizer.utorid

        full = client_for(organizer).get(f'/events/{event.id}').data
        assert 'guests' in full and full['pointsRemain'] == 100
        assert 'guests' in client_for(manager).get(f'/events/{event.id}').data

    def test_unpublished_event_hidden(self, client_for, regular_user):
        event = EventFactory(published=False)
        assert client_for(regular_user).get(f'/events/{event.id}').status_code == 404

    def test_organizer_updates_but_cannot_publish(self, client_for):
        event = upcoming_event(published=False)
        organizer = EventOrganizerFactory(event=event).user
        client = client_for(organizer)

        response = client.patch(f'/events/{event.id}', {'name': 'Renamed', 'capacity': 5}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Renamed'

        assert client.patch(f'/events/{event.id}', {'published': True}, format='json').status_code == 403
        assert client.patch(f'/events/{event.id}', {'points': 200}, format='json').status_code == 403

    def test_regular_user_cannot_update(self, client_for, regular_user):
        event = upcoming_event()
        response = client_for(regular_user).patch(f'/events/{event.id}', {'name': 'x'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_started_event_freezes_fields(self, client_for, manager):
        event = EventFactory()
        client = client_for(manager)
        assert client.patch(f'/events/{event.id}', {'name': 'Late'}, format='json').status_code == 400
        response = client.patch(f'/events/{event.id}', {'endTime': iso(timedelta(days=3))}, format='json')
        assert response.status_code == status.HTTP_200_OK

    def test_capacity_not_below_guest_count(self, client_for, manager):
        event = upcoming_event(capacity=5)
        EventGuestFactory(event=event)
        EventGuestFactory(event=event)
        response = client_for(manager).patch(f'/events/{event.id}', {'capacity': 1}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_budget_change_keeps_conservation(self, client_for, manager):
        event = upcoming_event(points_total=100, points_remain=60, points_awarded=40)
        client = client_for(manager)

        response = client.patch(f'/events/{event.id}', {'points': 150}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['pointsRemain'] == 110

        response = client.patch(f'/events/{event.id}', {'points': 30}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        event.refresh_from_db()
        assert (event.points_total, event.points_remain, event.points_awarded) == (150, 110, 40)

    def test_rejected_budget_leaves_other_fields_unchanged(self, client_for, manager):
        event = upcoming_event(name='Launch', points_total=100, points_remain=40, points_awarded=60, published=False)

        response = client_for(manager).patch(
            f'/events/{event.id}', {'name': 'Renamed', 'published': True, 'points': 10}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        event.refresh_from_db()
        assert event.name == 'Launch'
        assert event.published is False
        assert (event.points_total, event.points_remain, event.points_awarded) == (100, 40, 60)

    def test_publish_only_true(self, client_for, manager):
        event = upcoming_event(published=False)
        client = client_for(manager)
        assert client.patch(f'/events/{event.id}', {'published': False}, format='json').status_code == 400
        assert client.patch(f'/events/{event.id}', {'published': True}, format='json').data['published'] is True

    def test_delete(self, client_for, manager):
        draft = upcoming_event(published=False)
        published = upcoming_event()
        client = client_for(manager)
        assert client.delete(f'/events/{published.id}').status_code == status.HTTP_400_BAD_REQUEST
        assert client.delete(f'/events/{draft.id}').status_code == status.HTTP_204_NO_CONTENT
        assert not Event.objects.filter(pk=draft.pk).exists()


@pytest.mark.django_db
class TestRoster:

    def test_add_and_remove_organizer(self, client_for, manager):
        event = upcoming_event()
        user = UserFactory()
        client = client_for(manager)

        response = client.post(f'/events/{event.id}/organizers', {'utorid': user.utorid}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert [o['utorid'] for o in response.data['organizers']] == [user.utorid]

        assert client.delete(f'/events/{event.id}/organizers/{user.id}').status_code == 204
        assert not EventOrganizer.objects.exists()

    def test_guest_cannot_become_organizer(self, client_for, manager):
        event = upcoming_event()
        guest = EventGuestFactory(event=event).user
        response = client_for(manager).post(f'/events/{event.id}/organizers', {'utorid': guest.utorid}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_organizer_cannot_rsvp(self, client_for):
        event = upcoming_event()
        organizer = EventOrganizerFactory(event=event).user
        assert client_for(organizer).post(f'/events/{event.id}/guests/me').status_code == 400

    def test_rsvp_and_cancel(self, client_for, regular_user):
        event = upcoming_event(capacity=1)
        client = client_for(regular_user)

        response = client.post(f'/events/{event.id}/guests/me')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['guestAdded']['utorid'] == regular_user.utorid
        assert response.data['numGuests'] == 1
        assert client.post(f'/events/{event.id}/guests/me').status_code == 400

        late = UserFactory()
        assert client_for(late).post(f'/events/{event.id}/guests/me').status_code == status.HTTP_410_GONE

        assert client.delete(f'/events/{event.id}/guests/me').status_code == 204
        assert not EventGuest.objects.exists()
        assert client.delete(f'/events/{event.id}/guests/me').status_code == 404

    def test_rsvp_to_ended_or_unpublished_event(self, client_for, regular_user):
        ended = EventFactory(
            start_time=timezone.now() - timedelta(days=2), end_time=timezone.now() - timedelta(days=1)
        )
        draft = upcoming_event(published=False)
        client = client_for(regular_user)
        assert client.post(f'/events/{ended.id}/guests/me').status_code == status.HTTP_410_GONE
        assert client.post(f'/events/{draft.id}/guests/me').status_code == status.HTTP_404_NOT_FOUND

    def test_organizer_adds_guest(self, client_for, regular_user):
        event = upcoming_event()
        organizer = EventOrganizerFactory(event=event).user

        response = client_for(organizer).post(
            f'/events/{event.id}/guests', {'utorid': regular_user.utorid}, format='json'
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert EventGuest.objects.filter(event=event, user=regular_user).exists()

        stranger = UserFactory()
        response = client_for(stranger).post(f'/events/{event.id}/guests', {'utorid': stranger.utorid}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_manager_removes_guest(self, client_for, manager):
        event = upcoming_event()
        guest = EventGuestFactory(event=event).user
        assert client_for(manager).delete(f'/events/{event.id}/guests/{guest.id}').status_code == 204
        assert client_for(manager).delete(f'/events/{event.id}/guests/{guest.id}').status_code == 404
