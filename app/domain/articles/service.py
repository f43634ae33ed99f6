"""Article service - Business logic for articles, likes and comments"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import Article, Comment, Like, Profile
from ...shared.validators import require_fields, sanitize_field
from .repository import ArticleRepository
from .schemas import (
    ArticleCreate,
    ArticleDetail,
    ArticleListResponse,
    ArticleSummary,
    AuthorSummary,
    CommentCreate,
    CommentResponse,
    LikeResponse,
    LikeToggleResponse,
)

logger = logging.getLogger(__name__)


def author_summary(profile: Profile) -> AuthorSummary:
    return AuthorSummary(username=profile.username, avatarUrl=profile.avatar_url)


def like_response(like: Like) -> LikeResponse:
    return LikeResponse(
        id=like.id, userId=like.user_id, createdAt=like.created_at, user=author_summary(like.user)
    )


def comment_response(comment: Comment, depth: int = 0) -> CommentResponse:
    # One level of replies is rendered under each root comment
    replies = [comment_response(r, depth + 1) for r in comment.replies] if depth == 0 else []
    return CommentResponse(
        id=comment.id,
        content=comment.content,
        createdAt=comment.created_at,
        articleId=comment.article_id,
        userId=comment.user_id,
        parentId=comment.parent_id,
        user=author_summary(comment.user),
        replies=replies,
    )


def article_summary(article: Article, viewer_id: Optional[str] = None) -> ArticleSummary:
    return ArticleSummary(
        id=article.id,
        title=article.title,
        excerpt=article.excerpt,
        content=article.content,
        category=article.category,
        image=article.image,
        tags=article.tags or [],
        views=article.views or 0,
        createdAt=article.created_at,
        author=author_summary(article.author),
        likesCount=len(article.likes),
        commentsCount=len(article.comments),
        likedByMe=any(like.user_id == viewer_id for like in article.likes),
    )


class ArticleService:
    """Service layer for article business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ArticleRepository()

    def get_article_or_404(self, article_id: str) -> Article:
        article = self.repo.get_article(self.db, article_id)
        if not article:
            raise HTTPException(status_code=404, detail="Article not found")
        return article

    def list_articles(
        self,
        viewer_id: str,
        search: Optional[str] = None,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> ArticleListResponse:
        articles, total = self.repo.search_articles(
            self.db, search, category, offset=(page - 1) * limit, limit=limit
        )
        return ArticleListResponse(
            articles=[article_summary(a, viewer_id) for a in articles], total=total
        )

    def get_article(self, article_id: str, viewer_id: str) -> ArticleDetail:
        """Get one article with its likes and comments, counting the view"""
        article = self.repo.increment_views(self.db, self.get_article_or_404(article_id))
        comments = self.repo.get_top_level_comments(self.db, article_id)

        return ArticleDetail(
            **article_summary(article, viewer_id).model_dump(),
            likes=[like_response(like) for like in self.repo.get_likes(self.db, article_id)],
            comments=[comment_response(c) for c in comments],
        )

    def create_article(self, data: ArticleCreate, author: Profile) -> ArticleSummary:
        require_fields(data, "title", "excerpt", "content", "category")

        if data.image and not data.image.startswith(("http://", "https://")):
            raise HTTPException(status_code=400, detail="Image must be an http(s) URL")

        article_data = {
            "title": sanitize_field(data.title, "Title", max_length=255),
            "excerpt": sanitize_field(data.excerpt, "Excerpt"),
            "content": sanitize_field(data.content, "Content", max_length=100000),
            "category": data.category.strip(),
            "image": data.image,
            "tags": [t.strip() for t in (data.tags or []) if t and t.strip()],
        }

        try:
            article = self.repo.create_article(self.db, author.user_id, **article_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating article for {author.user_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create article") from e

        logger.info(f"📰 Article {article.id} published by {author.username}")
        return article_summary(article, author.user_id)

    def toggle_like(self, article_id: str, profile: Profile) -> LikeToggleResponse:
        """Like the article, or remove the like if the user already liked it"""
        self.get_article_or_404(article_id)

        existing = self.repo.get_like(self.db, article_id, profile.user_id)
        if existing:
            self.repo.delete_like(self.db, existing)
            liked, message = False, "Like removed"
        else:
            try:
                self.repo.add_like(self.db, article_id, profile.user_id)
            except IntegrityError:
                # A concurrent request from the same user already inserted the like
                self.db.rollback()
                logger.info(f"Duplicate like ignored for {profile.user_id} on {article_id}")
            liked, message = True, "Like added"

        likes = self.repo.get_likes(self.db, article_id)
        logger.info(f"👍 {message} by {profile.user_id} on {article_id} ({len(likes)} total)")
        return LikeToggleResponse(
            liked=liked, data=[like_response(like) for like in likes], message=message
        )

    def get_comments(self, article_id: str) -> list[CommentResponse]:
        self.get_article_or_404(article_id)
        return [comment_response(c) for c in self.repo.get_top_level_comments(self.db, article_id)]

    def create_comment(
        self, article_id: str, data: CommentCreate, profile: Profile
    ) -> CommentResponse:
        require_fields(data, "content", detail="Content is required")
        self.get_article_or_404(article_id)

        if data.parentId:
            parent = self.repo.get_comment(self.db, data.parentId)
            if not parent or parent.article_id != article_id:
                raise HTTPException(status_code=404, detail="Parent comment not found")
            if parent.parent_id:
                raise HTTPException(
                    status_code=400, detail="Replies can only be added to top-level comments"
                )

        content = sanitize_field(data.content, "Content")

        try:
            comment = self.repo.create_comment(
                self.db,
                article_id=article_id,
                user_id=profile.user_id,
                content=content,
                parent_id=data.parentId,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error creating comment on {article_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create comment") from e

        logger.info(f"💬 Comment {comment.id} added to {article_id} by {profile.username}")
        return comment_response(comment)
