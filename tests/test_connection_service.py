"""
Tests for interest, mutual matching and decline
"""

import pytest
from django.db import IntegrityError, transaction

from matchmaking import connection_service, notifier
from matchmaking.errors import InvalidOperation, UserNotFound
from matchmaking.models import Connection


@pytest.mark.django_db
class TestExpressInterest:
    """express_interest state machine"""

    def test_first_interest_is_pending(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')

        result = connection_service.express_interest(event.id, alice.id, bob.id)

        assert result.already_exists is False
        assert result.mutual is False
        assert result.connection.status == Connection.Status.PENDING
        assert (result.connection.user_a_id, result.connection.user_b_id) == (alice.id, bob.id)

    def test_double_interest_is_noop(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')

        first = connection_service.express_interest(event.id, alice.id, bob.id)
        second = connection_service.express_interest(event.id, alice.id, bob.id)

        assert second.already_exists is True
        assert second.mutual is False
        assert second.connection.id == first.connection.id
        assert Connection.objects.count() == 1

    def test_reverse_interest_becomes_mutual(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')

        connection_service.express_interest(event.id, alice.id, bob.id)
        result = connection_service.express_interest(event.id, bob.id, alice.id)

        assert result.mutual is True
        assert result.connection.status == Connection.Status.ACCEPTED
        assert Connection.objects.count() == 1
        assert Connection.objects.get().status == Connection.Status.ACCEPTED

    def test_interest_after_accept_reports_mutual(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        connection_service.express_interest(event.id, alice.id, bob.id)
        connection_service.express_interest(event.id, bob.id, alice.id)

        again = connection_service.express_interest(event.id, alice.id, bob.id)

        assert again.already_exists is True
        assert again.mutual is True
        assert Connection.objects.count() == 1

    def test_self_interest_rejected(self, event, make_profile):
        alice = make_profile('alice')
        with pytest.raises(InvalidOperation):
            connection_service.express_interest(event.id, alice.id, alice.id)

    def test_unknown_target_rejected(self, event, make_profile, host):
        alice = make_profile('alice')
        with pytest.raises(UserNotFound):
            connection_service.express_interest(event.id, alice.id, host.id)
        with pytest.raises(UserNotFound):
            connection_service.express_interest(event.id, alice.id, 999999)
        assert Connection.objects.count() == 0

    def test_requester_without_profile_rejected(self, event, make_profile, host):
        bob = make_profile('bob')
        with pytest.raises(UserNotFound):
            connection_service.express_interest(event.id, host.id, bob.id)

    def test_pair_is_unique_in_store(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        Connection.objects.create(event=event, user_a=alice, user_b=bob)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                Connection.objects.create(event=event, user_a=bob, user_b=alice)

    def test_losing_insert_race_becomes_mutual(self, event, make_profile, monkeypatch, django_capture_on_commit_callbacks):
        alice = make_profile('alice')
        bob = make_profile('bob')
        published = []
        monkeypatch.setattr(notifier, 'publish', lambda user_ids, message_type, data: published.append((message_type, data['status'])))
        real_pair = connection_service._pair
        lookups = []

        def pair_after_other_side_inserted(event_id, user_id, other_id):
            lookups.append(user_id)
            if len(lookups) == 1:
                Connection.objects.create(event=event, user_a=alice, user_b=bob)
                return Connection.objects.none()
            return real_pair(event_id, user_id, other_id)

        monkeypatch.setattr(connection_service, '_pair', pair_after_other_side_inserted)

        with django_capture_on_commit_callbacks(execute=True):
            result = connection_service.express_interest(event.id, bob.id, alice.id)

        assert result.mutual is True
        assert result.already_exists is False
        assert result.connection.status == Connection.Status.ACCEPTED
        assert Connection.objects.count() == 1
        assert published == [(notifier.CONNECTIONS_CHANGED, 'accepted')]


@pytest.mark.django_db
class TestDeclineInterest:
    """decline_interest"""

    def test_target_can_decline(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        connection_service.express_interest(event.id, alice.id, bob.id)

        connection = connection_service.decline_interest(event.id, bob.id, alice.id)

        assert connection.status == Connection.Status.DECLINED
        assert connection_service.decline_interest(event.id, bob.id, alice.id).status == Connection.Status.DECLINED

    def test_declined_interest_does_not_become_mutual(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        connection_service.express_interest(event.id, alice.id, bob.id)
        connection_service.decline_interest(event.id, bob.id, alice.id)

        result = connection_service.express_interest(event.id, bob.id, alice.id)

        assert result.mutual is False
        assert result.already_exists is True
        assert result.connection.status == Connection.Status.DECLINED

    def test_initiator_cannot_decline_own_interest(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        connection_service.express_interest(event.id, alice.id, bob.id)

        with pytest.raises(InvalidOperation):
            connection_service.decline_interest(event.id, alice.id, bob.id)

    def test_cannot_decline_accepted(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        connection_service.express_interest(event.id, alice.id, bob.id)
        connection_service.express_interest(event.id, bob.id, alice.id)

        with pytest.raises(InvalidOperation):
            connection_service.decline_interest(event.id, bob.id, alice.id)

    def test_nothing_to_decline(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        with pytest.raises(InvalidOperation):
            connection_service.decline_interest(event.id, bob.id, alice.id)


@pytest.mark.django_db
class TestListConnections:
    """list_connections"""

    def test_lists_rows_where_user_is_either_party(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        carol = make_profile('carol')
        dave = make_profile('dave')
        connection_service.express_interest(event.id, alice.id, bob.id)
        connection_service.express_interest(event.id, carol.id, alice.id)
        connection_service.express_interest(event.id, bob.id, dave.id)

        connections = connection_service.list_connections(event.id, alice.id)

        assert {c.other_user_id(alice.id) for c in connections} == {bob.id, carol.id}

    def test_status_filter(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        carol = make_profile('carol')
        connection_service.express_interest(event.id, alice.id, bob.id)
        connection_service.express_interest(event.id, bob.id, alice.id)
        connection_service.express_interest(event.id, alice.id, carol.id)

        accepted = connection_service.list_connections(event.id, alice.id, status='accepted')
        pending = connection_service.list_connections(event.id, alice.id, status='pending')

        assert [c.other_user_id(alice.id) for c in accepted] == [bob.id]
        assert [c.other_user_id(alice.id) for c in pending] == [carol.id]

    def test_declined_hidden_without_filter(self, event, make_profile):
        alice = make_profile('alice')
        bob = make_profile('bob')
        carol = make_profile('carol')
        connection_service.express_interest(event.id, bob.id, alice.id)
        connection_service.decline_interest(event.id, alice.id, bob.id)
        connection_service.express_interest(event.id, alice.id, carol.id)

        visible = connection_service.list_connections(event.id, alice.id)
        declined = connection_service.list_connections(event.id, alice.id, status='declined')

        assert [c.other_user_id(alice.id) for c in visible] == [carol.id]
        assert [c.other_user_id(alice.id) for c in declined] == [bob.id]

    def test_unknown_status(self, event, make_profile):
        alice = make_profile('alice')
        with pytest.raises(InvalidOperation):
            connection_service.list_connections(event.id, alice.id, status='maybe')
