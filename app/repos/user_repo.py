from sqlalchemy.orm import Session

from app.models.user import User
from app.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, name: str, email: str, password: str) -> User:
    user = User(
        id=generate_id(),
        name=name,
        email=email,
        password_hash=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update(
    db: Session,
    user_id: str,
    *,
    email: str | None = None,
    name: str | None = None,
    last_name: str | None = None,
    location: str | None = None,
) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    if email is not None:
        user.email = email
    if name is not None:
        user.name = name
    if last_name is not None:
        user.last_name = last_name
    if location is not None:
        user.location = location
    db.commit()
    db.refresh(user)
    return user
