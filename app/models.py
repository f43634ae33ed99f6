import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate an opaque string identifier for a new row"""
    return str(uuid.uuid4())


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(255), unique=True, index=True, nullable=False)  # Auth provider subject
    full_name = Column(String(255), nullable=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    website = Column(String(500), nullable=True)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    articles = relationship("Article", back_populates="author")


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    specialization = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    appointments = relationship("Appointment", back_populates="doctor")
    medical_records = relationship("MedicalRecord", back_populates="doctor")


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(255), index=True, nullable=False)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # HH:MM, 24-hour, clinic local time
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    doctor = relationship("Doctor", back_populates="appointments")


class MedicalRecord(Base):
    __tablename__ = "medical_records"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(255), index=True, nullable=False)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False)
    date = Column(Date, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    doctor = relationship("Doctor", back_populates="medical_records")


class Article(Base):
    __tablename__ = "articles"

    id = Column(String(36), primary_key=True, default=generate_id)
    author_id = Column(String(255), ForeignKey("profiles.user_id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    excerpt = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    image = Column(String(500), nullable=True)
    tags = Column(JSON, default=list, nullable=True)
    views = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    author = relationship("Profile", back_populates="articles")
    likes = relationship("Like", back_populates="article", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="article", cascade="all, delete-orphan")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=generate_id)
    article_id = Column(String(36), ForeignKey("articles.id"), nullable=False, index=True)
    user_id = Column(String(255), ForeignKey("profiles.user_id"), nullable=False)
    parent_id = Column(String(36), ForeignKey("comments.id"), nullable=True, index=True)
    content = Column(Text, nullable=False)
    # Set client-side so comments posted within the same second still sort
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    article = relationship("Article", back_populates="comments")
    user = relationship("Profile")
    parent = relationship("Comment", remote_side=[id], back_populates="replies")
    replies = relationship("Comment", back_populates="parent", order_by="Comment.created_at")


class Like(Base):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("article_id", "user_id", name="uq_like_article_user"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    article_id = Column(String(36), ForeignKey("articles.id"), nullable=False, index=True)
    user_id = Column(String(255), ForeignKey("profiles.user_id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    article = relationship("Article", back_populates="likes")
    user = relationship("Profile")
