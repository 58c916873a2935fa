"""Data models for the article store."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


def slugify(text: str) -> str:
    """
    Turn a title or tag name into a URL slug.

    Examples:
        "Next.js Intro" -> "nextjs-intro"
        "  TypeScript_Tips " -> "typescript-tips"
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


@dataclass
class Tag:
    """An article tag."""
    id: int
    name: str
    slug: str
    created_at: Optional[datetime] = None

    def __str__(self) -> str:
        return self.name


@dataclass
class Article:
    """A blog article with its tags."""
    id: int
    title: str
    slug: str
    body: str
    description: Optional[str] = None
    author: Optional[str] = None
    published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    tags: list[Tag] = field(default_factory=list)

    @property
    def url_path(self) -> str:
        """Site path, /articles/<id>/<slug>."""
        return f"/articles/{self.id}/{self.slug}"

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags]

    def __repr__(self) -> str:
        state = "published" if self.published else "draft"
        return f"Article({self.id}, {self.slug!r}, {state})"
