from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from tinycrm.database import Base


class User(Base):
    """Credential record for HTTP Basic authentication."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User {self.username}>"
