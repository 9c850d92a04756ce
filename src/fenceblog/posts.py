"""
Post loading - YAML frontmatter plus Markdown body, one file per slug
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import yaml

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)', re.DOTALL)

FALLBACK_DATE = datetime(1900, 1, 1)


class FrontmatterError(ValueError):
    pass


@dataclass
class Post:
    slug: str
    title: str
    date: Any = None
    description: str = ''
    image: Optional[str] = None
    tags: list = field(default_factory=list)
    content: str = ''
    photo_by: Optional[str] = None


def parse_frontmatter(text: str) -> tuple[dict, str]:
    """Split a leading --- YAML block from the Markdown body."""
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid frontmatter: {e}") from e
    if not isinstance(data, dict):
        raise FrontmatterError("Frontmatter must be a mapping")

    return data, text[match.end():]


def _post_from_text(slug: str, text: str) -> Post:
    data, content = parse_frontmatter(text)
    tags = data.get('tags') or []
    if isinstance(tags, str):
        tags = [tags]

    return Post(
        slug=slug,
        title=data.get('title') or slug,
        date=data.get('date'),
        description=data.get('description') or '',
        image=data.get('image'),
        tags=[str(tag) for tag in tags],
        content=content,
        photo_by=data.get('photoBy'),
    )


def load_post(posts_dir: Path, slug: str) -> Post:
    path = Path(posts_dir) / f"{slug}.md"
    return _post_from_text(slug, path.read_text(encoding='utf-8'))


def load_posts(posts_dir: Path) -> list[Post]:
    return [
        _post_from_text(path.stem, path.read_text(encoding='utf-8'))
        for path in sorted(Path(posts_dir).glob("*.md"))
    ]


def parse_date(value) -> datetime:
    """Convert a frontmatter date (date, datetime or ISO string) to datetime."""
    if value is None:
        return FALLBACK_DATE
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.fromisoformat(str(value).strip()).replace(tzinfo=None)
    except ValueError as e:
        print(f"Warning: Could not parse date '{value}': {e}")
        # Sorts after every real post
        return FALLBACK_DATE


def format_date(value) -> str:
    """Format a date the way post headers show it, e.g. "January 2, 2024"."""
    if value is None:
        return ''
    parsed = parse_date(value)
    if parsed is FALLBACK_DATE:
        return str(value)
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def sorted_posts(posts: list[Post]) -> list[Post]:
    """Newest first."""
    return sorted(posts, key=lambda post: parse_date(post.date), reverse=True)
