"""
Tests for user management and profile endpoints.
"""
import pytest
from rest_framework import status

from apps.promotions.models import UserPromotionUsage
from apps.users.models import ResetToken, Role, User
from tests.factories import OneTimePromotionFactory, PASSWORD, UserFactory


@pytest.mark.django_db
class TestUserCreation:

    def test_cashier_creates_unverified_user_with_activation_token(self, client_for, cashier):
        response = client_for(cashier).post(
            '/users', {'utorid': 'newuser1', 'name': 'New User', 'email': 'newuser1@mail.utoronto.ca'}, format='json'
        )

        assert response.status_code == status.HTTP_201_CREATED
        user = User.objects.get(utorid='newuser1')
        assert response.data['id'] == user.id
        assert response.data['verified'] is False
        assert not user.has_usable_password()
        assert ResetToken.objects.filter(user=user, pk=response.data['resetToken']).exists()

    @pytest.mark.parametrize('payload', [
        {'utorid': 'bad', 'name': 'Short Id', 'email': 'bad@mail.utoronto.ca'},
        {'utorid': 'gooduser', 'name': '', 'email': 'gooduser@mail.utoronto.ca'},
        {'utorid': 'gooduser', 'name': 'x' * 51, 'email': 'gooduser@mail.utoronto.ca'},
        {'utorid': 'gooduser', 'name': 'Wrong Domain', 'email': 'gooduser@gmail.com'},
        {'utorid': 'gooduser', 'name': 'Missing Email'},
    ])
    def test_invalid_payloads(self, client_for, cashier, payload):
        response = client_for(cashier).post('/users', payload, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_duplicates_conflict(self, client_for, cashier):
        UserFactory(utorid='taken001')
        client = client_for(cashier)
        response = client.post(
            '/users', {'utorid': 'taken001', 'name': 'Dup', 'email': 'fresh001@mail.utoronto.ca'}, format='json'
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        response = client.post(
            '/users', {'utorid': 'fresh001', 'name': 'Dup', 'email': 'taken001@mail.utoronto.ca'}, format='json'
        )
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_regular_user_cannot_create(self, client_for, regular_user):
        response = client_for(regular_user).post(
            '/users', {'utorid': 'newuser2', 'name': 'New', 'email': 'newuser2@mail.utoronto.ca'}, format='json'
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data == {'error': 'Forbidden'}


@pytest.mark.django_db
class TestUserList:

    def test_filters_and_pagination(self, client_for, manager):
        UserFactory(utorid='zeta0001', name='Zeta One', verified=False)
        UserFactory(utorid='zeta0002', name='Zeta Two', role=Role.CASHIER)
        UserFactory(utorid='omega001', name='Omega')
        client = client_for(manager)

        response = client.get('/users', {'name': 'zeta'})
        assert response.data['count'] == 2
        response = client.get('/users', {'name': 'Zeta', 'role': 'cashier'})
        assert [row['utorid'] for row in response.data['results']] == ['zeta0002']
        response = client.get('/users', {'verified': 'false'})
        assert [row['utorid'] for row in response.data['results']] == ['zeta0001']
        response = client.get('/users', {'limit': 2, 'page': 2})
        assert response.data['count'] == 4
        assert len(response.data['results']) == 2

    def test_activated_filter(self, client_for, manager, api_client):
        UserFactory(utorid='active01')
        UserFactory(utorid='dormant1')
        api_client.post('/auth/tokens', {'utorid': 'active01', 'password': PASSWORD}, format='json')

        response = client_for(manager).get('/users', {'activated': 'true'})
        assert [row['utorid'] for row in response.data['results']] == ['active01']

    @pytest.mark.parametrize('params', [{'page': 0}, {'limit': -1}, {'page': 'abc'}])
    def test_bad_pagination(self, client_for, manager, params):
        assert client_for(manager).get('/users', params).status_code == status.HTTP_400_BAD_REQUEST

    def test_cashier_cannot_list(self, client_for, cashier):
        assert client_for(cashier).get('/users').status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestUserDetail:

    def test_manager_sees_full_shape_with_usable_promotions(self, client_for, manager):
        user = UserFactory()
        usable = OneTimePromotionFactory()
        used = OneTimePromotionFactory()
        UserPromotionUsage.objects.create(user=user, promotion=used)

        response = client_for(manager).get(f'/users/{user.id}')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert [p['id'] for p in response.data['promotions']] == [usable.id]

    def test_cashier_sees_reduced_shape(self, client_for, cashier):
        user = UserFactory()
        response = client_for(cashier).get(f'/users/{user.id}')
        assert set(response.data) == {'id', 'utorid', 'name', 'points', 'verified', 'promotions'}

    def test_missing_user(self, client_for, cashier):
        response = client_for(cashier).get('/users/999999')
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Not Found'}


@pytest.mark.django_db
class TestUserUpdate:

    def test_manager_updates_flags(self, client_for, manager):
        user = UserFactory(verified=False)
        response = client_for(manager).patch(
            f'/users/{user.id}', {'verified': True, 'suspicious': True}, format='json'
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            'id': user.id, 'utorid': user.utorid, 'name': user.name, 'verified': True, 'suspicious': True,
        }

    def test_verified_only_true(self, client_for, manager):
        user = UserFactory()
        response = client_for(manager).patch(f'/users/{user.id}', {'verified': False}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_manager_role_limits(self, client_for, manager, superuser):
        user = UserFactory()
        response = client_for(manager).patch(f'/users/{user.id}', {'role': 'cashier'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['role'] == 'cashier'

        response = client_for(manager).patch(f'/users/{user.id}', {'role': 'manager'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = client_for(superuser).patch(f'/users/{user.id}', {'role': 'Manager'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.role == Role.MANAGER

    def test_suspicious_user_cannot_become_cashier(self, client_for, manager):
        user = UserFactory(suspicious=True)
        response = client_for(manager).patch(f'/users/{user.id}', {'role': 'cashier'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = client_for(manager).patch(
            f'/users/{user.id}', {'role': 'cashier', 'suspicious': False}, format='json'
        )
        assert response.status_code == status.HTTP_200_OK

    def test_empty_patch(self, client_for, manager):
        user = UserFactory()
        response = client_for(manager).patch(f'/users/{user.id}', {}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestOwnProfile:

    def test_get_and_update_profile(self, client_for, regular_user):
        client = client_for(regular_user)
        response = client.get('/users/me')
        assert response.data['utorid'] == regular_user.utorid
        assert response.data['promotions'] == []

        response = client.patch('/users/me', {'name': 'Renamed', 'birthday': '2000-02-29'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Renamed'
        assert response.data['birthday'] == '2000-02-29'

    @pytest.mark.parametrize('payload', [{'birthday': '2001-02-29'}, {'email': 'me@example.com'}, {'name': ''}])
    def test_invalid_profile_update(self, client_for, regular_user, payload):
        response = client_for(regular_user).patch('/users/me', payload, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_email_taken_conflict(self, client_for, regular_user):
        other = UserFactory()
        response = client_for(regular_user).patch('/users/me', {'email': other.email}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_change_password(self, client_for, regular_user):
        client = client_for(regular_user)
        response = client.patch('/users/me/password', {'old': 'wrong', 'new': 'N3w#Passw0rd'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = client.patch('/users/me/password', {'old': PASSWORD, 'new': 'weak'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = client.patch('/users/me/password', {'old': PASSWORD, 'new': 'N3w#Passw0rd'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        regular_user.refresh_from_db()
        assert regular_user.check_password('N3w#Passw0rd')
