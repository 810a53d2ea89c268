from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..common.datetime_utils import Clock
from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError
from .model import CurrentUser
from .repository import AuthUserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate a user (login)."""

    def __init__(self, users: AuthUserRepository, clock: Clock):
        self._users = users
        self._clock = clock

    def authenticate(self, username: str, password: str) -> CurrentUser:
        username = require_non_empty(username, "Username")
        require_non_empty(password, "Password")

        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            logger.warning("login rejected for unknown or inactive user %r", username)
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("login rejected for %r: bad password", username)
            raise AuthenticationError("Invalid username or password")

        self._users.touch_last_login(user.user_id, at=self._clock.now())
        logger.info("user %s logged in as %s", user.user_id, user.role.value)

        return CurrentUser(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            employee_id=user.employee_id,
        )
