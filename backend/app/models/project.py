from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class Project(Base):
    __tablename__ = "projects"

    project_id = Column(Integer, primary_key=True, index=True)
    parent_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    grade_level = Column(String(50), nullable=True)
    budget = Column(Numeric(10, 2), nullable=True)
    delivery_type = Column(String(20), default="online", server_default="online")
    difficulty = Column(String(20), default="beginner", server_default="beginner")
    deadline = Column(Date, nullable=True)
    category = Column(String(100), nullable=True)
    status = Column(String(20), default="open", server_default="open")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    parent = relationship("User", back_populates="projects")
    # Deleting a project also removes its bids (DB cascade + ORM cascade).
    bids = relationship("Bid", back_populates="project", cascade="all, delete-orphan", passive_deletes=True)
