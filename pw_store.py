# pw_store.py
import os

# Hashing: Argon2 preferred, bcrypt fallback
try:
    from argon2 import PasswordHasher
    _HAS_ARGON2 = True
    PH = PasswordHasher(time_cost=2, memory_cost=102400)
except ImportError:
    _HAS_ARGON2 = False
    import bcrypt

from pw_core import Password, as_bytes


def hash_password(password: Password) -> str:
    if _HAS_ARGON2:
        return PH.hash(as_bytes(password))
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(as_bytes(password), salt).decode("utf-8")


def verify_password(hashed: str, password: Password) -> bool:
    if hashed.startswith("$argon2"):
        from argon2.exceptions import VerificationError
        try:
            return PH.verify(hashed, as_bytes(password))
        except VerificationError:
            return False
    import bcrypt
    return bcrypt.checkpw(as_bytes(password), hashed.encode("utf-8"))


def append_hash(path: str, username: str, password: Password) -> None:
    """Install an accepted password as a `username:hash` line, mode 0600."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o600)
    with os.fdopen(fd, "a", encoding="utf-8") as f:
        f.write(f"{username or '-'}:{hash_password(password)}\n")
