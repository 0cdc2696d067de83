"""User model."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.orm import relationship

from app.db.base import Base, JSONType


class User(Base):
    """User model for authentication and candidate/employer profiles."""

    __tablename__ = "users"

    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="CANDIDATE")  # CANDIDATE, EMPLOYER, ADMIN
    is_active = Column(Boolean, default=True, nullable=False)
    blocked = Column(Boolean, default=False, nullable=False)
    block_reason = Column(String(500))

    # Profile
    phone = Column(String(30))
    mobile = Column(String(30))
    location = Column(String(255))
    company = Column(String(255))
    position = Column(String(255))
    skills = Column(JSONType, default=list)  # ["Python", "React", ...]
    image = Column(String(500))

    # Relationships
    jobs = relationship("Job", back_populates="employer", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
