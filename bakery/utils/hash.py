"""Password hashing for back-office accounts."""
from passlib.context import CryptContext

from bakery.core.exceptions import ValidationError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes of the secret
MAX_BCRYPT_BYTES = 72
MIN_PASSWORD_LENGTH = 8


def truncate_password(password: str) -> str:
    """Trim so the UTF-8 encoding fits in MAX_BCRYPT_BYTES without splitting a character."""
    encoded = password.encode("utf-8")[:MAX_BCRYPT_BYTES]
    return encoded.decode("utf-8", errors="ignore")


def check_password_policy(password: str) -> None:
    """Reject passwords that are too short or lack a digit or letter."""
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if not any(ch.isdigit() for ch in password) or not any(ch.isalpha() for ch in password):
        raise ValidationError("Password must contain letters and digits")


def hash_password(password: str) -> str:
    return pwd_context.hash(truncate_password(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(truncate_password(plain_password), hashed_password)
