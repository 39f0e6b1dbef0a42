from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from fullservice.core.database import Base


class Listing(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    # display number shown to buyers, assigned right after insert
    target_number = Column(String(32), unique=True, nullable=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(12, 2), nullable=False, default=0)

    icon_url = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)

    contact_platform = Column(String(50), nullable=True)
    contact_info = Column(String(255), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    owner = relationship("User", back_populates="listings")

    images = relationship(
        "ListingImage",
        back_populates="listing",
        cascade="all, delete-orphan",
        order_by="ListingImage.sort_order",
    )

    @property
    def image_urls(self) -> list[str]:
        return [img.url for img in self.images]
