import bcrypt

from .error_handlers import ValidationError

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """
    One-way salted bcrypt hash of ``password``.

    bcrypt truncates at 72 *bytes* and recent builds raise past it,
    so the limit is enforced up front.
    """
    if not password:
        raise ValidationError("Password is required")

    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password must be 72 bytes or less")

    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > BCRYPT_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
