# apps/core/auth_service.py

"""
Authentication service - registration, login and bearer tokens

Access and refresh tokens are HS256 JWTs signed with
TRACKBOARD_JWT_SECRET. The `type` claim keeps a refresh token from being
accepted as an access token and vice versa.
"""

import logging
from datetime import timedelta
from typing import Dict, Optional

import jwt
from django.contrib.auth import authenticate
from django.db import transaction
from django.utils import timezone

from .exceptions import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from .models import User

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Encapsulates every authentication rule of the API

    Private methods hold token handling; public methods return plain dicts
    ready for the response envelope or raise AppError subclasses.
    """

    ACCESS = 'access'
    REFRESH = 'refresh'

    def __init__(self, secret: str, algorithm: str = 'HS256',
                 access_lifetime: timedelta = timedelta(minutes=15),
                 refresh_lifetime: timedelta = timedelta(days=7)):
        self._secret = secret
        self._algorithm = algorithm
        self._access_lifetime = access_lifetime
        self._refresh_lifetime = refresh_lifetime

    def register(self, data: Dict) -> Dict:
        """Creates the user and returns {user, accessToken, refreshToken}"""
        email = User.objects.normalize_email(data['email']).lower()

        if User.objects.filter(email__iexact=email).exists():
            raise ConflictError('User with this email already exists')

        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=data['password'],
                name=data['name'],
            )

        logger.info("User registered: %s", user.email)
        return self._session_payload(user)

    def login(self, email: str, password: str) -> Dict:
        user = authenticate(username=email.lower(), password=password)
        if user is None:
            logger.warning("Failed login for %s", email)
            raise UnauthorizedError('Invalid email or password')

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])
        return self._session_payload(user)

    def refresh(self, refresh_token: str) -> Dict:
        """Exchanges a refresh token for a fresh token pair"""
        user = self._user_from_token(refresh_token, self.REFRESH)
        if user is None:
            raise UnauthorizedError('Invalid or expired token')
        return self._session_payload(user)

    def authenticate_token(self, token: str) -> Optional[User]:
        """User behind an access token, or None when the token is unusable"""
        return self._user_from_token(token, self.ACCESS)

    def get_profile(self, user_id) -> Dict:
        return self._get_user(user_id).to_dict()

    def update_profile(self, user_id, data: Dict) -> Dict:
        user = self._get_user(user_id)

        if 'name' in data and data['name']:
            user.name = data['name']
        if 'avatar_url' in data:
            user.avatar_url = data['avatar_url'] or ''

        user.save()
        return user.to_dict()

    def change_password(self, user_id, current_password: str, new_password: str) -> Dict:
        user = self._get_user(user_id)

        if not user.check_password(current_password):
            raise BadRequestError('Current password is incorrect')

        user.set_password(new_password)
        user.save(update_fields=['password', 'updated_at'])
        logger.info("Password changed for %s", user.email)
        return {'message': 'Password changed successfully'}

    # =================== PRIVATE METHODS ===================

    def _get_user(self, user_id) -> User:
        try:
            return User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise NotFoundError('User not found')

    def _session_payload(self, user: User) -> Dict:
        return {
            'user': user.to_dict(),
            'accessToken': self._issue_token(user, self.ACCESS, self._access_lifetime),
            'refreshToken': self._issue_token(user, self.REFRESH, self._refresh_lifetime),
        }

    def _issue_token(self, user: User, token_type: str, lifetime: timedelta) -> str:
        now = timezone.now()
        payload = {
            'userId': str(user.id),
            'email': user.email,
            'type': token_type,
            'iat': now,
            'exp': now + lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def _user_from_token(self, token: str, token_type: str) -> Optional[User]:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected %s token: %s", token_type, exc)
            return None

        if payload.get('type') != token_type:
            return None

        return User.objects.filter(id=payload.get('userId'), is_active=True).first()
