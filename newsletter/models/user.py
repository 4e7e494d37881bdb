"""User ORM — operator credentials for newsletter publishing and the admin area.

Invariants:
    - password_hash is a PHC string (argon2id); plaintext is never stored
    - Read-only from the service's perspective; provisioned by scripts/create_user.py
"""

import uuid

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from newsletter.db.base import Base


class User(Base):
    __tablename__ = "users"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<User user_id={self.user_id!r} username={self.username!r}>"
