import bcrypt
from cloudspace.core.errors import ValidationError

# bcrypt only looks at the first 72 bytes of the input
MAX_PASSWORD_BYTES = 72

def get_password_hash(password: str, rounds: int = 10) -> str:
    """Hash a workspace password with a salted bcrypt digest"""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(encoded, salt).decode("utf-8")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed hash or oversized password
        return False
