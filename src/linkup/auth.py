"""Password hashing and bearer token primitives."""

from itsdangerous import BadSignature, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from linkup.config import settings

# Token serializer
serializer = URLSafeTimedSerializer(settings.secret_key, salt="linkup-access-token")


def hash_password(password: str) -> str:
    """Hash a plain-text password for storage."""
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored hash."""
    return check_password_hash(password_hash, password)


def issue_token(user_id: int) -> str:
    """Create a signed bearer token for a user."""
    return serializer.dumps({"user_id": user_id})


def verify_token(token: str, max_age: int | None = None) -> int | None:
    """
    Decode a bearer token.

    Args:
        token: Token string as sent by the client
        max_age: Maximum token age in seconds (defaults to settings.token_max_age_seconds)

    Returns:
        The user ID, or None if the token is invalid or expired
    """
    if max_age is None:
        max_age = settings.token_max_age_seconds
    try:
        data = serializer.loads(token, max_age=max_age)
    except BadSignature:
        return None

    if not isinstance(data, dict):
        return None
    user_id = data.get("user_id")
    if not isinstance(user_id, int):
        return None
    return user_id
