"""Comment model"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime
from app.core.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    body = Column(String, nullable=False)
    # la FK garantit qu'un commentaire vise un lien existant
    link_id = Column(Integer, ForeignKey("links.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
