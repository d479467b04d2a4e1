"""Tests for token authentication, in the service and over HTTP."""

import jwt
import pytest
from django.conf import settings

from apps.core.exceptions import BadRequestError, ConflictError, UnauthorizedError


@pytest.mark.django_db
class TestAuthenticationService:
    """Tests for AuthenticationService."""

    def test_register_returns_tokens(self, auth_service):
        result = auth_service.register({'email': 'New@Example.com', 'password': 'password123', 'name': 'New'})

        assert result['user']['email'] == 'new@example.com'
        assert auth_service.authenticate_token(result['accessToken']).email == 'new@example.com'

    def test_register_duplicate(self, auth_service, owner):
        with pytest.raises(ConflictError):
            auth_service.register({'email': owner.email, 'password': 'password123', 'name': 'Again'})

    def test_login_wrong_password(self, auth_service, owner):
        with pytest.raises(UnauthorizedError) as excinfo:
            auth_service.login(owner.email, 'wrong-password')
        assert excinfo.value.message == 'Invalid email or password'

    def test_refresh_token_is_not_an_access_token(self, auth_service, owner):
        tokens = auth_service.login(owner.email, 'password123')

        assert auth_service.authenticate_token(tokens['refreshToken']) is None
        assert auth_service.refresh(tokens['refreshToken'])['user']['id'] == owner.id

    def test_refresh_rejects_access_token(self, auth_service, owner):
        tokens = auth_service.login(owner.email, 'password123')
        with pytest.raises(UnauthorizedError):
            auth_service.refresh(tokens['accessToken'])

    def test_token_signed_with_other_secret(self, auth_service, owner):
        forged = jwt.encode(
            {'userId': str(owner.id), 'type': 'access'}, 'some-other-secret-value-0123456789', algorithm='HS256'
        )
        assert auth_service.authenticate_token(forged) is None

    def test_inactive_user_rejected(self, auth_service, owner):
        token = auth_service.login(owner.email, 'password123')['accessToken']
        owner.is_active = False
        owner.save()
        assert auth_service.authenticate_token(token) is None

    def test_change_password(self, auth_service, owner):
        with pytest.raises(BadRequestError):
            auth_service.change_password(owner.id, 'wrong-password', 'newpassword123')

        auth_service.change_password(owner.id, 'password123', 'newpassword123')
        assert auth_service.login(owner.email, 'newpassword123')['user']['id'] == owner.id


@pytest.mark.django_db
class TestAuthEndpoints:
    """Tests for the /api/auth routes and bearer token handling."""

    def test_register(self, api):
        response = api.post('/api/auth/register', {
            'email': 'api@example.com', 'password': 'password123', 'name': 'Api User',
        })

        body = response.json()
        assert response.status_code == 201
        assert body['success'] is True
        assert body['message'] == 'User registered successfully'
        assert set(body['data']) == {'user', 'accessToken', 'refreshToken'}

    def test_register_validation(self, api):
        response = api.post('/api/auth/register', {'email': 'not-an-email', 'password': 'short', 'name': 'A'})

        body = response.json()
        assert response.status_code == 400
        assert body == {'success': False, 'error': 'ValidationError', 'message': body['message']}
        assert 'email' in body['message']
        assert 'password' in body['message']

    def test_malformed_json(self, client):
        response = client.post('/api/auth/login', data='{not json', content_type='application/json')
        assert response.status_code == 400
        assert response.json()['message'] == 'Malformed JSON body'

    def test_login(self, api, owner):
        response = api.post('/api/auth/login', {'email': owner.email, 'password': 'password123'})
        assert response.status_code == 200
        assert response.json()['message'] == 'Login successful'

    def test_profile_without_token(self, api):
        response = api.get('/api/auth/profile')

        assert response.status_code == 401
        assert response.json() == {
            'success': False, 'error': 'UnauthorizedError', 'message': 'No token provided',
        }

    def test_profile_with_invalid_token(self, client):
        response = client.get('/api/auth/profile', HTTP_AUTHORIZATION='Bearer garbage')

        assert response.status_code == 401
        assert response.json()['message'] == 'Invalid or expired token'

    def test_profile_update(self, owner_api):
        response = owner_api.put('/api/auth/profile', {'name': 'Renamed', 'avatarUrl': 'https://img.example.com/a.png'})

        data = response.json()['data']
        assert data['name'] == 'Renamed'
        assert data['avatarUrl'] == 'https://img.example.com/a.png'

    def test_session_does_not_authenticate_api(self, client, owner):
        client.force_login(owner)
        assert client.get('/api/auth/profile').status_code == 401

    def test_tokens_use_configured_secret(self, auth_service, owner):
        token = auth_service.login(owner.email, 'password123')['accessToken']
        payload = jwt.decode(token, settings.TRACKBOARD_JWT_SECRET, algorithms=['HS256'])
        assert payload['type'] == 'access'
        assert payload['userId'] == str(owner.id)
