import logging
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from fullservice.core.errors import NotFound
from fullservice.core.permissions import Action, require
from fullservice.models.listing import Listing
from fullservice.models.listing_image import ListingImage
from fullservice.models.user import User
from fullservice.schemas.listing import ListingCreate

logger = logging.getLogger(__name__)


def _listing_query(db: Session):
    return db.query(Listing).options(
        selectinload(Listing.images),
        selectinload(Listing.owner),
    )


def create_listing(db: Session, owner: User, listing_in: ListingCreate) -> Listing:
    require(owner, Action.CREATE_LISTING)

    data = listing_in.model_dump(exclude={"images"})
    listing = Listing(**data, owner_id=owner.id, is_active=True)
    listing.images = [
        ListingImage(url=url, sort_order=idx)
        for idx, url in enumerate(listing_in.images)
    ]
    db.add(listing)
    db.flush()

    listing.target_number = f"T{listing.id:06d}"
    db.commit()
    db.refresh(listing)

    logger.info("Identity %s created listing %s", owner.id, listing.target_number)
    return listing


def search_listings(db: Session, term: Optional[str] = None) -> List[Listing]:
    """Active listings newest-first; a non-empty term matches the name only."""
    query = _listing_query(db).filter(Listing.is_active.is_(True))

    term = (term or "").strip()
    if term:
        query = query.filter(Listing.name.ilike(f"%{term}%"))

    return query.order_by(Listing.created_at.desc(), Listing.id.desc()).all()


def get_listing(db: Session, listing_id: int, active_only: bool = True) -> Listing:
    query = _listing_query(db).filter(Listing.id == listing_id)
    if active_only:
        query = query.filter(Listing.is_active.is_(True))
    listing = query.first()
    if listing is None:
        raise NotFound("Listing not found")
    return listing


def deactivate_listing(db: Session, actor: User, listing_id: int) -> Listing:
    listing = get_listing(db, listing_id, active_only=False)
    require(actor, Action.DEACTIVATE_LISTING, listing)

    listing.is_active = False
    db.commit()
    db.refresh(listing)
    return listing
