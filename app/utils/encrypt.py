from passlib.hash import hex_sha1
from sqlalchemy.orm import Session

from app.models.models import User


def hash_password(password: str) -> str:
    # unsalted: lookups match on (email, digest)
    return hex_sha1.hash(password)


def verify_credentials(db: Session, email: str, password: str) -> User | None:
    """Return the user registered with this email and password, or None."""
    if not email or not password:
        return None
    return (
        db.query(User)
        .filter(User.email == email, User.hashed_password == hash_password(password))
        .first()
    )
