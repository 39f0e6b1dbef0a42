from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from fullservice.core.database import Base


class Article(Base):
    __tablename__ = "news"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    images = Column(JSON, nullable=False, default=list)
    video_url = Column(Text, nullable=True)
    # free-form listing references (usually target numbers)
    product_links = Column(JSON, nullable=False, default=list)
    # [{"platform": ..., "url": ..., "icon": ...}]
    social_links = Column(JSON, nullable=False, default=list)

    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    author = relationship("User", back_populates="articles")
