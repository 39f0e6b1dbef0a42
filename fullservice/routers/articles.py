from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fullservice.core.database import get_db
from fullservice.core.security import get_current_user
from fullservice.models.user import User
from fullservice.schemas.article import ArticleCreate, ArticleRead
from fullservice.services import news

router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("/", response_model=List[ArticleRead])
def list_articles(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return news.list_articles(db)


@router.post("/", response_model=ArticleRead, status_code=status.HTTP_201_CREATED)
def create_article(
    article_in: ArticleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return news.create_article(db, current_user, article_in)


@router.post("/{article_id}/deactivate", response_model=ArticleRead)
def deactivate_article(
    article_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return news.deactivate_article(db, current_user, article_id)
