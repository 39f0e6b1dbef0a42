import logging
from typing import List

from sqlalchemy.orm import Session, selectinload

from fullservice.core.errors import NotFound
from fullservice.core.permissions import Action, require
from fullservice.models.article import Article
from fullservice.models.user import User
from fullservice.schemas.article import ArticleCreate

logger = logging.getLogger(__name__)


def create_article(db: Session, author: User, article_in: ArticleCreate) -> Article:
    require(author, Action.CREATE_ARTICLE)

    article = Article(**article_in.model_dump(), author_id=author.id, is_active=True)
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def list_articles(db: Session) -> List[Article]:
    return (
        db.query(Article)
        .options(selectinload(Article.author))
        .filter(Article.is_active.is_(True))
        .order_by(Article.created_at.desc(), Article.id.desc())
        .all()
    )


def deactivate_article(db: Session, actor: User, article_id: int) -> Article:
    article = db.query(Article).filter(Article.id == article_id).first()
    if article is None:
        raise NotFound("Article not found")

    require(actor, Action.DEACTIVATE_ARTICLE, article)

    article.is_active = False
    db.commit()
    db.refresh(article)
    logger.info("Identity %s deactivated article %s", actor.id, article.id)
    return article
