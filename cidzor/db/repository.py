"""Data access layer for articles and tags."""

import logging
import sqlite3
from datetime import datetime
from typing import Iterable, Optional

from .models import Article, Tag, slugify

logger = logging.getLogger(__name__)

# Columns update() is allowed to touch
ARTICLE_FIELDS = ("title", "slug", "description", "body", "author", "published")


def _now() -> str:
    return datetime.now().isoformat(sep=" ")


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _row_to_tag(row: sqlite3.Row) -> Tag:
    return Tag(
        id=row["id"],
        name=row["name"],
        slug=row["slug"],
        created_at=_parse_ts(row["created_at"]),
    )


class TagRepository:
    """Repository for article tags."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get_by_name(self, name: str) -> Optional[Tag]:
        row = self.conn.execute(
            "SELECT * FROM tags WHERE name = ?", (name,)
        ).fetchone()
        return _row_to_tag(row) if row else None

    def get_by_slug(self, slug: str) -> Optional[Tag]:
        row = self.conn.execute(
            "SELECT * FROM tags WHERE slug = ?", (slug,)
        ).fetchone()
        return _row_to_tag(row) if row else None

    def _get_or_create(self, name: str) -> Tag:
        """Find or insert a tag without committing."""
        existing = self.get_by_name(name)
        if existing:
            return existing

        cursor = self.conn.execute(
            "INSERT INTO tags (name, slug, created_at) VALUES (?, ?, ?)",
            (name, slugify(name), _now()),
        )
        logger.debug("Created tag %r", name)
        row = self.conn.execute(
            "SELECT * FROM tags WHERE id = ?", (cursor.lastrowid,)
        ).fetchone()
        return _row_to_tag(row)

    def get_or_create(self, name: str) -> Tag:
        """
        Get a tag by name, creating it if needed.

        Args:
            name: Tag name

        Returns:
            The existing or newly created tag
        """
        name = name.strip()
        if not name:
            raise ValueError("Tag name cannot be empty")
        try:
            tag = self._get_or_create(name)
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        return tag

    def for_article(self, article_id: int) -> list[Tag]:
        """Get all tags for an article, ordered by name."""
        cursor = self.conn.execute(
            """
            SELECT t.*
            FROM tags t
            JOIN article_tags at ON at.tag_id = t.id
            WHERE at.article_id = ?
            ORDER BY t.name
            """,
            (article_id,),
        )
        return [_row_to_tag(row) for row in cursor]

    def list_used(self) -> list[Tag]:
        """Distinct tags attached to published articles, ordered by name."""
        cursor = self.conn.execute(
            """
            SELECT DISTINCT t.*
            FROM tags t
            JOIN article_tags at ON at.tag_id = t.id
            JOIN articles a ON a.id = at.article_id
            WHERE a.published = 1
            ORDER BY t.name
            """
        )
        return [_row_to_tag(row) for row in cursor]

    def counts(self) -> list[tuple[Tag, int]]:
        """
        Tag usage counts over published articles.

        Returns:
            List of (tag, count), most used first
        """
        cursor = self.conn.execute(
            """
            SELECT t.*, COUNT(at.article_id) AS article_count
            FROM tags t
            JOIN article_tags at ON at.tag_id = t.id
            JOIN articles a ON a.id = at.article_id
            WHERE a.published = 1
            GROUP BY t.id
            ORDER BY article_count DESC, t.name
            """
        )
        return [(_row_to_tag(row), row["article_count"]) for row in cursor]

    def delete(self, tag_id: int) -> bool:
        """Delete a tag; its article associations cascade."""
        try:
            cursor = self.conn.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        return cursor.rowcount > 0


class ArticleRepository:
    """Repository for storing and querying articles."""

    def __init__(self, conn: sqlite3.Connection):
        """
        Initialize repository with database connection.

        Args:
            conn: SQLite database connection
        """
        self.conn = conn
        self.tags = TagRepository(conn)

    def _row_to_article(self, row: sqlite3.Row) -> Article:
        """Convert a database row to Article, loading its tags."""
        return Article(
            id=row["id"],
            title=row["title"],
            slug=row["slug"],
            body=row["body"],
            description=row["description"],
            author=row["author"],
            published=bool(row["published"]),
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
            tags=self.tags.for_article(row["id"]),
        )

    def _set_tags(self, article_id: int, tag_names: Iterable[str]) -> None:
        """Replace an article's tags. Does not commit."""
        self.conn.execute(
            "DELETE FROM article_tags WHERE article_id = ?", (article_id,)
        )
        seen = set()
        for name in tag_names:
            name = name.strip()
            if not name or name in seen:
                continue
            seen.add(name)
            tag = self.tags._get_or_create(name)
            self.conn.execute(
                "INSERT INTO article_tags (article_id, tag_id) VALUES (?, ?)",
                (article_id, tag.id),
            )

    def create(
        self,
        title: str,
        body: str,
        slug: Optional[str] = None,
        description: Optional[str] = None,
        author: Optional[str] = None,
        published: bool = False,
        tags: Iterable[str] = (),
    ) -> Article:
        """
        Insert an article with tags.

        Args:
            title: Article title
            body: Markdown body
            slug: URL slug (default: slugified title)
            description: Short summary
            author: Author name
            published: Whether the article is visible on the site
            tags: Tag names, created on demand

        Returns:
            The stored article

        Raises:
            sqlite3.IntegrityError: if the slug is already taken
        """
        slug = slug or slugify(title)
        if not slug:
            raise ValueError(f"Cannot derive a slug from title: {title!r}")

        now = _now()
        try:
            cursor = self.conn.execute(
                """
                INSERT INTO articles (
                    title, slug, description, body, author, published,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (title, slug, description, body, author, published, now, now),
            )
            article_id = cursor.lastrowid
            self._set_tags(article_id, tags)
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

        logger.info("Created article %d (%s)", article_id, slug)
        return self.get_by_id(article_id)

    def get_by_id(self, article_id: int) -> Optional[Article]:
        row = self.conn.execute(
            "SELECT * FROM articles WHERE id = ?", (article_id,)
        ).fetchone()
        return self._row_to_article(row) if row else None

    def get_by_slug(self, slug: str) -> Optional[Article]:
        row = self.conn.execute(
            "SELECT * FROM articles WHERE slug = ?", (slug,)
        ).fetchone()
        return self._row_to_article(row) if row else None

    def list_all(self) -> list[Article]:
        """All articles including drafts, newest first."""
        cursor = self.conn.execute(
            "SELECT * FROM articles ORDER BY created_at DESC, id DESC"
        )
        return [self._row_to_article(row) for row in cursor.fetchall()]

    def list_published(self) -> list[Article]:
        """Published articles, newest first."""
        cursor = self.conn.execute(
            """
            SELECT * FROM articles
            WHERE published = 1
            ORDER BY created_at DESC, id DESC
            """
        )
        return [self._row_to_article(row) for row in cursor.fetchall()]

    def list_by_tag(self, tag_slug: str) -> list[Article]:
        """Published articles carrying a tag, newest first."""
        cursor = self.conn.execute(
            """
            SELECT a.*
            FROM articles a
            JOIN article_tags at ON at.article_id = a.id
            JOIN tags t ON t.id = at.tag_id
            WHERE t.slug = ? AND a.published = 1
            ORDER BY a.created_at DESC, a.id DESC
            """,
            (tag_slug,),
        )
        return [self._row_to_article(row) for row in cursor.fetchall()]

    def update(
        self,
        article_id: int,
        tags: Optional[Iterable[str]] = None,
        **fields,
    ) -> Optional[Article]:
        """
        Update an article.

        Args:
            article_id: Article ID
            tags: New tag names; None leaves tags untouched
            **fields: Columns to change (title, slug, description, body,
                author, published)

        Returns:
            The updated article, or None if it does not exist
        """
        unknown = set(fields) - set(ARTICLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown article fields: {', '.join(sorted(unknown))}")

        assignments = [f"{name} = ?" for name in fields]
        params = list(fields.values())
        assignments.append("updated_at = ?")
        params.append(_now())
        params.append(article_id)

        try:
            cursor = self.conn.execute(
                f"UPDATE articles SET {', '.join(assignments)} WHERE id = ?",
                params,
            )
            if cursor.rowcount == 0:
                self.conn.rollback()
                return None
            if tags is not None:
                self._set_tags(article_id, tags)
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

        return self.get_by_id(article_id)

    def set_published(self, article_id: int, published: bool) -> Optional[Article]:
        """Publish or unpublish an article."""
        return self.update(article_id, published=published)

    def delete(self, article_id: int) -> bool:
        """Delete an article; its tag associations cascade."""
        try:
            cursor = self.conn.execute(
                "DELETE FROM articles WHERE id = ?", (article_id,)
            )
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Deleted article %d", article_id)
        return deleted

    def count(self, published_only: bool = False) -> int:
        """Get total number of articles."""
        query = "SELECT COUNT(*) FROM articles"
        if published_only:
            query += " WHERE published = 1"
        return self.conn.execute(query).fetchone()[0]
