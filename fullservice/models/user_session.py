from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from fullservice.core.database import Base


class UserSession(Base):
    """Audit row written after sign-in; nothing reads it back at runtime."""

    __tablename__ = "user_sessions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    ip_address = Column(String(64), nullable=True)
    device_info = Column(JSON, nullable=True)
    platform_name = Column(String(255), nullable=True)
    # {"latitude", "longitude", "accuracy"}
    location = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="sessions")
