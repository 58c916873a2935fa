"""Database layer for the article store."""

from .schema import create_database, get_connection, get_schema_version
from .models import Article, Tag, slugify
from .repository import ArticleRepository, TagRepository

__all__ = [
    "create_database",
    "get_connection",
    "get_schema_version",
    "Article",
    "Tag",
    "slugify",
    "ArticleRepository",
    "TagRepository",
]
