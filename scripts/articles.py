#!/usr/bin/env python3
"""Manage blog articles and tags."""

import argparse
import sqlite3
import sys
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cidzor.db import ArticleRepository, Article, create_database
from cidzor.logging_utils import setup_logging


def print_articles(console: Console, articles: list[Article], title: str) -> None:
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Slug", style="cyan")
    table.add_column("Tags")
    table.add_column("Status")
    table.add_column("Created")

    for article in articles:
        status = "[green]published[/]" if article.published else "[yellow]draft[/]"
        created = article.created_at.strftime("%Y-%m-%d") if article.created_at else ""
        table.add_row(
            str(article.id),
            article.title,
            article.slug,
            ", ".join(article.tag_names),
            status,
            created,
        )

    console.print(table)


def cmd_create(repo: ArticleRepository, args, console: Console) -> int:
    body = Path(args.body_file).read_text() if args.body_file else args.body
    if not body:
        console.print("[red]Article body is required (--body or --body-file)[/]")
        return 1

    article = repo.create(
        title=args.title,
        body=body,
        slug=args.slug,
        description=args.description,
        author=args.author,
        published=args.publish,
        tags=args.tags.split(",") if args.tags else (),
    )
    console.print(f"[bold green]Created[/] {article.url_path}")
    return 0


def cmd_list(repo: ArticleRepository, args, console: Console) -> int:
    if args.tag:
        articles = repo.list_by_tag(args.tag)
        title = f"Published articles tagged '{args.tag}'"
    elif args.all:
        articles = repo.list_all()
        title = "All articles"
    else:
        articles = repo.list_published()
        title = "Published articles"

    if not articles:
        console.print("[yellow]No articles found[/]")
        return 0

    print_articles(console, articles, title)
    return 0


def cmd_show(repo: ArticleRepository, args, console: Console) -> int:
    if args.article.isdigit():
        article = repo.get_by_id(int(args.article))
    else:
        article = repo.get_by_slug(args.article)

    if article is None:
        console.print(f"[red]Article not found: {args.article}[/]")
        return 1

    subtitle = ", ".join(article.tag_names) or None
    console.print(Panel(Markdown(article.body), title=article.title, subtitle=subtitle))
    return 0


def cmd_publish(repo: ArticleRepository, args, console: Console) -> int:
    article = repo.set_published(args.id, args.command == "publish")
    if article is None:
        console.print(f"[red]Article not found: {args.id}[/]")
        return 1
    console.print(f"{article.slug}: {'published' if article.published else 'draft'}")
    return 0


def cmd_delete(repo: ArticleRepository, args, console: Console) -> int:
    if not repo.delete(args.id):
        console.print(f"[red]Article not found: {args.id}[/]")
        return 1
    console.print(f"Deleted article {args.id}")
    return 0


def cmd_tags(repo: ArticleRepository, args, console: Console) -> int:
    counts = repo.tags.counts()
    if not counts:
        console.print("[yellow]No tags on published articles[/]")
        return 0

    table = Table(title="Tags")
    table.add_column("Tag")
    table.add_column("Slug", style="cyan")
    table.add_column("Articles", justify="right")
    for tag, count in counts:
        table.add_row(tag.name, tag.slug, str(count))
    console.print(table)
    return 0


COMMANDS = {
    "create": cmd_create,
    "list": cmd_list,
    "show": cmd_show,
    "publish": cmd_publish,
    "unpublish": cmd_publish,
    "delete": cmd_delete,
    "tags": cmd_tags,
}


def main():
    parser = argparse.ArgumentParser(description="Manage blog articles")
    parser.add_argument(
        "-d", "--database",
        default="articles.db",
        help="Database file path (default: articles.db)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create an article")
    create.add_argument("title")
    create.add_argument("--body", help="Markdown body")
    create.add_argument("--body-file", help="Read the Markdown body from a file")
    create.add_argument("--slug", help="URL slug (default: from title)")
    create.add_argument("--description")
    create.add_argument("--author")
    create.add_argument("--tags", help="Comma separated tag names")
    create.add_argument("--publish", action="store_true", help="Publish immediately")

    lst = sub.add_parser("list", help="List articles")
    lst.add_argument("--all", action="store_true", help="Include drafts")
    lst.add_argument("--tag", help="Only published articles with this tag slug")

    show = sub.add_parser("show", help="Render an article")
    show.add_argument("article", help="Article ID or slug")

    for name in ("publish", "unpublish", "delete"):
        p = sub.add_parser(name, help=f"{name.capitalize()} an article")
        p.add_argument("id", type=int)

    sub.add_parser("tags", help="Tag usage over published articles")

    args = parser.parse_args()
    console = Console()
    setup_logging(args.verbose, console=Console(stderr=True))

    conn = create_database(args.database)
    repo = ArticleRepository(conn)
    try:
        return COMMANDS[args.command](repo, args, console)
    except (ValueError, OSError, sqlite3.IntegrityError) as e:
        console.print(f"[red]Error: {e}[/]")
        return 1
    finally:
        conn.close()


if __name__ == "__main__":
    sys.exit(main())
