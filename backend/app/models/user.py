from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

USER_ROLES = ("parent", "helper")


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('parent', 'helper')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(Text, nullable=False)  # store hashed password
    role = Column(String(20), nullable=False)  # parent / helper
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    projects = relationship("Project", back_populates="parent", cascade="all, delete-orphan", passive_deletes=True)
    bids = relationship("Bid", back_populates="freelancer", cascade="all, delete-orphan", passive_deletes=True)
