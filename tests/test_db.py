"""Tests for the article store."""

import sqlite3

import pytest

from cidzor.db.models import Article, slugify
from cidzor.db.repository import ArticleRepository, TagRepository
from cidzor.db.schema import create_database, get_schema_version


@pytest.fixture
def repo(temp_db):
    conn, _ = temp_db
    return ArticleRepository(conn)


@pytest.fixture
def seeded(repo):
    """Two published articles and a draft."""
    intro = repo.create(
        "Next.js Intro",
        "# Hello\n\nApp router basics.",
        description="Getting started",
        author="cidzor",
        published=True,
        tags=["Next.js", "React"],
    )
    tips = repo.create(
        "TypeScript Tips",
        "Use `satisfies`.",
        published=True,
        tags=["TypeScript", "React"],
    )
    draft = repo.create("Work in progress", "TBD", tags=["Drafts"])
    return intro, tips, draft


class TestSlugify:
    def test_basic(self):
        assert slugify("Next.js Intro") == "nextjs-intro"

    def test_whitespace_and_underscores(self):
        assert slugify("  TypeScript_Tips  ") == "typescript-tips"

    def test_collapses_dashes(self):
        assert slugify("a -- b") == "a-b"

    def test_strips_edges(self):
        assert slugify("-Hello!-") == "hello"


class TestSchema:
    def test_create_database(self, temp_db):
        conn, _ = temp_db

        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table'"
        )
        tables = {row[0] for row in cursor}

        assert "articles" in tables
        assert "tags" in tables
        assert "article_tags" in tables
        assert "schema_version" in tables

    def test_schema_version(self, temp_db):
        conn, _ = temp_db
        assert get_schema_version(conn) == 1

    def test_create_database_force(self, temp_db, repo):
        _, db_path = temp_db
        repo.create("Hello", "World")

        conn2 = create_database(db_path, force=True)
        assert get_schema_version(conn2) == 1
        assert ArticleRepository(conn2).count() == 0
        conn2.close()

    def test_in_memory(self):
        conn = create_database(":memory:")
        assert get_schema_version(conn) == 1
        conn.close()


class TestArticleRepository:
    def test_create(self, repo):
        article = repo.create("Hello World", "Body", tags=["Python", "Poker"])

        assert isinstance(article, Article)
        assert article.id is not None
        assert article.slug == "hello-world"
        assert not article.published
        assert article.tag_names == ["Poker", "Python"]
        assert article.created_at is not None
        assert article.url_path == f"/articles/{article.id}/hello-world"

    def test_create_custom_slug(self, repo):
        article = repo.create("Hello World", "Body", slug="custom")
        assert article.slug == "custom"

    def test_duplicate_slug(self, repo):
        repo.create("Hello", "Body")
        with pytest.raises(sqlite3.IntegrityError):
            repo.create("Hello", "Other body")
        assert repo.count() == 1

    def test_empty_slug(self, repo):
        with pytest.raises(ValueError):
            repo.create("!!!", "Body")

    def test_duplicate_tag_names_collapse(self, repo):
        article = repo.create("Hello", "Body", tags=["Poker", "Poker", " "])
        assert article.tag_names == ["Poker"]

    def test_get_by_id_and_slug(self, repo, seeded):
        intro, _, _ = seeded
        assert repo.get_by_id(intro.id).slug == "nextjs-intro"
        assert repo.get_by_slug("nextjs-intro").id == intro.id
        assert repo.get_by_id(9999) is None
        assert repo.get_by_slug("missing") is None

    def test_list_published_newest_first(self, repo, seeded):
        intro, tips, _ = seeded
        published = repo.list_published()
        assert [a.id for a in published] == [tips.id, intro.id]

    def test_list_all_includes_drafts(self, repo, seeded):
        assert len(repo.list_all()) == 3
        assert repo.count() == 3
        assert repo.count(published_only=True) == 2

    def test_list_by_tag(self, repo, seeded):
        intro, tips, _ = seeded
        assert [a.id for a in repo.list_by_tag("react")] == [tips.id, intro.id]
        assert [a.id for a in repo.list_by_tag("nextjs")] == [intro.id]
        # Drafts stay hidden
        assert repo.list_by_tag("drafts") == []
        assert repo.list_by_tag("missing") == []

    def test_update_fields(self, repo, seeded):
        intro, _, _ = seeded
        updated = repo.update(intro.id, title="Next.js Basics", description=None)

        assert updated.title == "Next.js Basics"
        assert updated.description is None
        assert updated.slug == "nextjs-intro"
        assert updated.updated_at >= intro.updated_at
        # Tags untouched when not given
        assert updated.tag_names == ["Next.js", "React"]

    def test_update_tags(self, repo, seeded):
        intro, _, _ = seeded
        updated = repo.update(intro.id, tags=["Web"])
        assert updated.tag_names == ["Web"]

    def test_update_clear_tags(self, repo, seeded):
        intro, _, _ = seeded
        assert repo.update(intro.id, tags=[]).tags == []

    def test_update_missing(self, repo):
        assert repo.update(9999, title="Nope") is None

    def test_update_unknown_field(self, repo, seeded):
        intro, _, _ = seeded
        with pytest.raises(ValueError, match="Unknown article fields"):
            repo.update(intro.id, views=10)

    def test_set_published(self, repo, seeded):
        _, _, draft = seeded
        assert repo.set_published(draft.id, True).published
        assert len(repo.list_published()) == 3
        assert not repo.set_published(draft.id, False).published

    def test_delete(self, repo, seeded):
        intro, _, _ = seeded
        assert repo.delete(intro.id)
        assert repo.get_by_id(intro.id) is None
        assert not repo.delete(intro.id)

    def test_delete_cascades_associations(self, repo, seeded):
        intro, _, _ = seeded
        repo.delete(intro.id)
        rows = repo.conn.execute(
            "SELECT COUNT(*) FROM article_tags WHERE article_id = ?", (intro.id,)
        ).fetchone()[0]
        assert rows == 0


class TestTagRepository:
    def test_get_or_create(self, temp_db):
        conn, _ = temp_db
        tags = TagRepository(conn)

        tag = tags.get_or_create("Machine Learning")
        assert tag.slug == "machine-learning"
        assert tags.get_or_create("Machine Learning").id == tag.id
        assert tags.get_by_slug("machine-learning").name == "Machine Learning"

    def test_get_or_create_empty(self, temp_db):
        conn, _ = temp_db
        with pytest.raises(ValueError):
            TagRepository(conn).get_or_create("  ")

    def test_list_used(self, repo, seeded):
        names = [t.name for t in repo.tags.list_used()]
        assert names == ["Next.js", "React", "TypeScript"]

    def test_counts(self, repo, seeded):
        counts = [(t.name, n) for t, n in repo.tags.counts()]
        assert counts[0] == ("React", 2)
        assert set(counts[1:]) == {("Next.js", 1), ("TypeScript", 1)}

    def test_delete_cascades(self, repo, seeded):
        intro, _, _ = seeded
        react = repo.tags.get_by_slug("react")

        assert repo.tags.delete(react.id)
        assert repo.get_by_id(intro.id).tag_names == ["Next.js"]
        assert not repo.tags.delete(react.id)
