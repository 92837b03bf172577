from __future__ import annotations

from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from ..core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS, TOKEN_SALT
from ..core.exceptions import AuthenticationError


class TokenService:
    """Signed, time-limited session tokens carrying only the staff id."""

    def __init__(self, secret_key: str, *, max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS):
        self._serializer = URLSafeTimedSerializer(secret_key, salt=TOKEN_SALT)
        self._max_age = int(max_age)

    def issue(self, staff_id: int) -> str:
        return self._serializer.dumps({"sid": int(staff_id)})

    def load(self, token: str) -> int:
        try:
            data = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise AuthenticationError("Sessão expirada, entre novamente") from None
        except BadData:
            raise AuthenticationError("Sessão inválida") from None
        try:
            return int(data["sid"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Sessão inválida") from None
