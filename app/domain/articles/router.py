"""Article router - FastAPI endpoints for articles, likes and comments"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import AuthUser, get_current_profile, get_current_user
from ...database import get_db
from ...models import Profile
from .schemas import (
    ArticleCreate,
    ArticleCreatedResponse,
    ArticleDetail,
    ArticleListResponse,
    CommentCreate,
    CommentCreatedResponse,
    CommentListResponse,
    LikeToggleResponse,
)
from .service import ArticleService

router = APIRouter(prefix="/articles", tags=["Articles"])


def get_article_service(db: Session = Depends(get_db)) -> ArticleService:
    """Dependency injection for ArticleService"""
    return ArticleService(db)


# ============================================================================
# ARTICLES
# ============================================================================


@router.get("", response_model=ArticleListResponse)
async def list_articles(
    search: Optional[str] = Query(None, description="Match on title or content"),
    category: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
):
    """Paginated article listing with search and category filters"""
    return service.list_articles(current_user.id, search, category, page, limit)


@router.post("", response_model=ArticleCreatedResponse, status_code=201)
async def create_article(
    data: ArticleCreate,
    author: Profile = Depends(get_current_profile),
    service: ArticleService = Depends(get_article_service),
):
    """Publish an article under the current user's profile"""
    return ArticleCreatedResponse(data=service.create_article(data, author))


@router.get("/{article_id}", response_model=ArticleDetail)
async def get_article(
    article_id: str,
    current_user: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
):
    """Read an article (counts as a view)"""
    return service.get_article(article_id, current_user.id)


# ============================================================================
# LIKES & COMMENTS
# ============================================================================


@router.post("/{article_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    article_id: str,
    profile: Profile = Depends(get_current_profile),
    service: ArticleService = Depends(get_article_service),
):
    """Like or unlike an article"""
    return service.toggle_like(article_id, profile)


@router.get("/{article_id}/comments", response_model=CommentListResponse)
async def get_comments(
    article_id: str,
    _: AuthUser = Depends(get_current_user),
    service: ArticleService = Depends(get_article_service),
):
    """Top-level comments, newest first, each with its replies"""
    return CommentListResponse(data=service.get_comments(article_id))


@router.post("/{article_id}/comments", response_model=CommentCreatedResponse)
async def create_comment(
    article_id: str,
    data: CommentCreate,
    profile: Profile = Depends(get_current_profile),
    service: ArticleService = Depends(get_article_service),
):
    """Comment on an article, or reply to a comment via parentId"""
    return CommentCreatedResponse(data=service.create_comment(article_id, data, profile))
