from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fullservice.core.database import get_db
from fullservice.core.security import get_current_user
from fullservice.models.user import User
from fullservice.schemas.listing import ListingCreate, ListingRead
from fullservice.services import catalog

router = APIRouter(prefix="/listings", tags=["listings"])


@router.get("/", response_model=List[ListingRead])
def search_listings(
    q: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return catalog.search_listings(db, q)


@router.post("/", response_model=ListingRead, status_code=status.HTTP_201_CREATED)
def create_listing(
    listing_in: ListingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return catalog.create_listing(db, current_user, listing_in)


@router.get("/{listing_id}", response_model=ListingRead)
def get_listing(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return catalog.get_listing(db, listing_id)


@router.post("/{listing_id}/deactivate", response_model=ListingRead)
def deactivate_listing(
    listing_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return catalog.deactivate_listing(db, current_user, listing_id)
