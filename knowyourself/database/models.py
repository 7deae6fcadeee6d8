"""
Database Models - SQLAlchemy ORM models for persistent storage.

This module defines the database schema for:
- Users
- Reflections (one per user and question)
- Analyses (at most one per user)
- Final learnings (at most one per user)
"""
from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Integer,
    Text,
    DateTime,
    ForeignKey,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class User(Base):
    """An account that owns reflections, an analysis and final learnings."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)  # UUID
    username = Column(String(64), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class Reflection(Base):
    """
    A user's answer to one catalog question.

    The question text is snapshotted at first save so the stored answer
    keeps its context even if the catalog wording changes.
    """
    __tablename__ = "reflections"
    __table_args__ = (
        UniqueConstraint("user_id", "question_id", name="uq_reflections_user_question"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, nullable=False)
    question_text = Column(Text, nullable=False)
    user_response = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Analysis(Base):
    """AI-generated discoveries for a user; replaced on every generation."""
    __tablename__ = "analysis"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    self_discoveries = Column(JSON, nullable=False, default=list)
    analysis_timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)


class FinalLearning(Base):
    """A user's single closing 'what I learned' document."""
    __tablename__ = "final_learnings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    self_written_learnings = Column(Text, nullable=True)
    submitted_at = Column(DateTime, default=datetime.utcnow, nullable=False)
