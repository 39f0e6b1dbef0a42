from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from fullservice.core.database import Base
from fullservice.core.roles import ROLE_STANDARD


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    username = Column(String(64), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)

    # opaque string, compared as-is at sign-in
    password = Column(String(255), nullable=False)

    role = Column(String(20), nullable=False, default=ROLE_STANDARD)
    is_banned = Column(Boolean, nullable=False, default=False)

    # data URL or external URL
    profile_image_url = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    listings = relationship("Listing", back_populates="owner")
    articles = relationship("Article", back_populates="author")
    payment_methods = relationship("PaymentMethod", back_populates="owner")
    sessions = relationship("UserSession", back_populates="user")
