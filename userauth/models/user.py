from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from userauth.core.database import Base


class User(Base):
    """
    User model representing registered accounts.

    Email is the external lookup key. The password column only ever holds
    a bcrypt hash. A non-null deleted_at marks a deactivated (soft-deleted)
    account which normal lookups skip.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # Unique across every row still in the table, deactivated ones included
    email = Column(String(100), unique=True, index=True, nullable=False)
    fname = Column(String(100), nullable=False)
    lname = Column(String(100), nullable=False)
    password = Column(String(100), nullable=False)
    profile_image = Column(String(255), nullable=True, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @property
    def is_active(self) -> bool:
        return self.deleted_at is None

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
