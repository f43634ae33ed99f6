"""Article repository - Database operations for articles, likes and comments"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from ...models import Article, Comment, Like


class ArticleRepository:
    """Repository for article database operations"""

    @staticmethod
    def search_articles(
        db: Session,
        search: Optional[str] = None,
        category: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Article], int]:
        """
        Search articles by title/content and category.
        Returns (page_of_articles, total_matching)
        """
        query = db.query(Article)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                (Article.title.ilike(search_term)) | (Article.content.ilike(search_term))
            )

        if category:
            query = query.filter(Article.category == category)

        total = query.count()
        articles = (
            query.options(
                joinedload(Article.author),
                selectinload(Article.likes),
                selectinload(Article.comments),
            )
            .order_by(Article.created_at.desc(), Article.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return articles, total

    @staticmethod
    def get_article(db: Session, article_id: str) -> Optional[Article]:
        return (
            db.query(Article)
            .options(joinedload(Article.author), selectinload(Article.likes))
            .filter(Article.id == article_id)
            .first()
        )

    @staticmethod
    def increment_views(db: Session, article: Article) -> Article:
        article.views = (article.views or 0) + 1
        db.commit()
        db.refresh(article)
        return article

    @staticmethod
    def create_article(db: Session, author_id: str, **article_data) -> Article:
        article = Article(author_id=author_id, **article_data)
        db.add(article)
        db.commit()
        db.refresh(article)
        return article

    # Like Methods
    @staticmethod
    def get_like(db: Session, article_id: str, user_id: str) -> Optional[Like]:
        return (
            db.query(Like)
            .filter(Like.article_id == article_id, Like.user_id == user_id)
            .first()
        )

    @staticmethod
    def add_like(db: Session, article_id: str, user_id: str) -> Like:
        like = Like(article_id=article_id, user_id=user_id)
        db.add(like)
        db.commit()
        return like

    @staticmethod
    def delete_like(db: Session, like: Like) -> None:
        db.delete(like)
        db.commit()

    @staticmethod
    def get_likes(db: Session, article_id: str) -> list[Like]:
        return (
            db.query(Like)
            .options(joinedload(Like.user))
            .filter(Like.article_id == article_id)
            .order_by(Like.created_at)
            .all()
        )

    # Comment Methods
    @staticmethod
    def get_top_level_comments(db: Session, article_id: str) -> list[Comment]:
        """Root comments newest first; replies load through the relationship"""
        return (
            db.query(Comment)
            .options(joinedload(Comment.user), selectinload(Comment.replies))
            .filter(Comment.article_id == article_id, Comment.parent_id.is_(None))
            .order_by(Comment.created_at.desc())
            .all()
        )

    @staticmethod
    def get_comment(db: Session, comment_id: str) -> Optional[Comment]:
        return db.query(Comment).filter(Comment.id == comment_id).first()

    @staticmethod
    def create_comment(
        db: Session, article_id: str, user_id: str, content: str, parent_id: Optional[str] = None
    ) -> Comment:
        comment = Comment(
            article_id=article_id, user_id=user_id, content=content, parent_id=parent_id
        )
        db.add(comment)
        db.commit()
        db.refresh(comment)
        return comment
