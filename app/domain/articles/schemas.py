"""Article domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ArticleCreate(BaseModel):
    """Schema for publishing an article"""

    title: Optional[str] = Field(None, max_length=255)
    excerpt: Optional[str] = Field(None, max_length=1000)
    content: Optional[str] = Field(None, max_length=100000)
    category: Optional[str] = Field(None, max_length=100)
    image: Optional[str] = None
    tags: Optional[list[str]] = None


class CommentCreate(BaseModel):
    content: Optional[str] = Field(None, max_length=5000)
    parentId: Optional[str] = None


class AuthorSummary(BaseModel):
    username: str
    avatarUrl: Optional[str] = None


class LikeResponse(BaseModel):
    id: str
    userId: str
    createdAt: Optional[datetime] = None
    user: AuthorSummary


class CommentResponse(BaseModel):
    id: str
    content: str
    createdAt: Optional[datetime] = None
    articleId: str
    userId: str
    parentId: Optional[str] = None
    user: AuthorSummary
    replies: list["CommentResponse"] = []


CommentResponse.model_rebuild()


class ArticleSummary(BaseModel):
    id: str
    title: str
    excerpt: str
    content: str
    category: str
    image: Optional[str] = None
    tags: list[str] = []
    views: int
    createdAt: Optional[datetime] = None
    author: AuthorSummary
    likesCount: int
    commentsCount: int
    likedByMe: bool = False


class ArticleDetail(ArticleSummary):
    likes: list[LikeResponse] = []
    comments: list[CommentResponse] = []


class ArticleListResponse(BaseModel):
    articles: list[ArticleSummary]
    total: int


class ArticleCreatedResponse(BaseModel):
    data: ArticleSummary


class LikeToggleResponse(BaseModel):
    success: bool = True
    liked: bool
    data: list[LikeResponse]
    message: str


class CommentCreatedResponse(BaseModel):
    success: bool = True
    data: CommentResponse


class CommentListResponse(BaseModel):
    success: bool = True
    data: list[CommentResponse]
