from passlib.context import CryptContext

from school_api.core import config

_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.SALT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash a plaintext password with a per-call random salt."""
    return _pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return _pwd_context.verify(password, hashed)


def dummy_verify() -> None:
    """Spend the same time as a real check when there is no hash to compare."""
    _pwd_context.dummy_verify()
