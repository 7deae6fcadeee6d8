"""
Database module - relational store access layer.

This module handles:
- Database connection management
- ORM models for users, reflections, analyses and final learnings
- Table creation
"""
from knowyourself.database.connection import DatabaseConnection, get_database, reset_database
from knowyourself.database.models import Base, User, Reflection, Analysis, FinalLearning
from knowyourself.database.init_db import init_tables

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "reset_database",
    # Models
    "Base",
    "User",
    "Reflection",
    "Analysis",
    "FinalLearning",
    # Init
    "init_tables",
]
