#!/usr/bin/env python3

"""
Blog builder - converts markdown posts to HTML
Requirements: markdown, pygments, pyyaml
"""

import argparse
from html import escape
from pathlib import Path
from typing import Optional

from .extension import render_markdown
from .highlight import DEFAULT_THEME, stylesheet
from .posts import Post, format_date, load_posts, sorted_posts

DEFAULT_POSTS_DIR = "posts"
DEFAULT_OUTPUT_DIR = "site"

# Tags with a --color-<tag> variable in the site CSS
DARK_COLORS = ["typescript", "react", "python", "git", "node"]
LIGHT_COLORS = ["javascript", "css", "html", "nextjs"]


def ribbon_style(tag: str) -> str:
    """Inline style for an index card ribbon; unknown tags use the javascript color."""
    color_name = tag if tag in DARK_COLORS or tag in LIGHT_COLORS else "javascript"
    style = f"background-color: var(--color-{color_name})"
    if tag in DARK_COLORS:
        style += "; color: var(--color-white)"
    return style


class BlogConverter:
    def __init__(self, edit_url: Optional[str] = None):
        self.edit_url = edit_url
        self.post_template = '''
<html>
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <meta name="description" content="{description}">
    <meta name="keywords" content="{keywords}">
    <link href="../highlight.css" rel="stylesheet" type="text/css">
</head>
<body>
<div id="post">
<header>
    <a href="../index.html" class="back">&larr; Back</a>
    <h1>{title}</h1>
    {tags}
    <time datetime="{date}"><i>{date_text}</i></time>
    {image}
</header>
<main>
{content}
{edit_link}
</main>
</div>
</body>
</html>
'''

        self.index_template = '''<html>
<head>
    <meta charset="utf-8">
    <title>Home</title>
    <link href="highlight.css" rel="stylesheet" type="text/css">
</head>
<body>
    <header><h1 class="title">Home</h1></header>
    <main>
    <section class="cards">
    <h2>Related posts</h2>
{articles}
    </section>
    </main>
</body>
</html>'''

        self.not_found_template = '''<html>
<head>
    <meta charset="utf-8">
    <title>Not Found</title>
</head>
<body>
    <main id="not-found">
    <h2>Not Found</h2>
    <p>Could not find requested resource</p>
    <a href="/index.html">Return Home</a>
    </main>
</body>
</html>'''

    def render_tags(self, tags: list[str]) -> str:
        if not tags:
            return ''
        items = ''.join(f'<li>{escape(tag)}</li>' for tag in tags)
        return f'<ul class="tags">{items}</ul>'

    def render_post(self, post: Post) -> str:
        """Render a post page around the highlighted Markdown body."""
        html_content = render_markdown(post.content)

        image = ''
        if post.image:
            photo_by = escape(post.photo_by or 'unknown author')
            image = (
                f'<img src="{escape(post.slug)}/{escape(post.image)}" '
                f'alt="{escape(post.title)}" title="photo by {photo_by}">'
            )

        edit_link = ''
        if self.edit_url:
            href = f"{self.edit_url.rstrip('/')}/{post.slug}.md"
            edit_link = f'<a href="{escape(href)}" class="edit-github" target="_blank">Edit on GitHub</a>'

        return self.post_template.format(
            title=escape(post.title),
            description=escape(post.description),
            keywords=escape(', '.join(post.tags)),
            tags=self.render_tags(post.tags),
            date=escape(str(post.date or '')),
            date_text=escape(format_date(post.date)),
            image=image,
            content=html_content,
            edit_link=edit_link,
        ).strip()

    def generate_index(self, posts: list[Post]) -> str:
        """Generate index.html content, newest posts first."""
        article_html = []
        for post in sorted_posts(posts):
            image = ''
            if post.image:
                image = f'<img src="posts/{escape(post.slug)}/{escape(post.image)}" alt="{escape(post.title)}">'
            ribbon = ''
            if post.tags:
                tag = post.tags[0]
                ribbon = f'<div class="ribbon" style="{escape(ribbon_style(tag))}">{escape(tag.upper())}</div>'
            article_html.append(
                f'''    <article class="card">
        <a href="posts/{escape(post.slug)}.html" class="card-link">{image}{ribbon}</a>
        <section class="content">
            <h3>{escape(post.title)}</h3>
            {self.render_tags(post.tags)}
            <p>{escape(post.description)}</p>
            <time datetime="{escape(str(post.date or ''))}"><i>{escape(format_date(post.date))}</i></time>
            <a href="posts/{escape(post.slug)}.html" class="button-read">Read the article</a>
        </section>
    </article>'''
            )

        return self.index_template.format(
            articles='\n'.join(article_html)
        ).strip()


def build_site(posts_dir: Path, output_dir: Path, theme: str = DEFAULT_THEME,
               edit_url: Optional[str] = None) -> list[Path]:
    """Write every post page, the index, the 404 page and the stylesheet.

    Returns the written paths.
    """
    posts = load_posts(posts_dir)
    if not posts:
        raise SystemExit(f"No markdown files found in {posts_dir}")

    converter = BlogConverter(edit_url=edit_url)
    (output_dir / "posts").mkdir(parents=True, exist_ok=True)
    written = []

    for post in posts:
        output_path = output_dir / "posts" / f"{post.slug}.html"
        output_path.write_text(converter.render_post(post), encoding='utf-8')
        print(f"Created {output_path}")
        written.append(output_path)

    index_path = output_dir / "index.html"
    index_path.write_text(converter.generate_index(posts), encoding='utf-8')
    print(f"Created {index_path}")
    written.append(index_path)

    not_found_path = output_dir / "404.html"
    not_found_path.write_text(converter.not_found_template, encoding='utf-8')
    print(f"Created {not_found_path}")
    written.append(not_found_path)

    css_path = output_dir / "highlight.css"
    css_path.write_text(stylesheet(theme), encoding='utf-8')
    print(f"Created {css_path}")
    written.append(css_path)

    return written


def main(argv: Optional[list[str]] = None):
    parser = argparse.ArgumentParser(description="Build the blog from markdown posts")
    parser.add_argument("--posts", default=DEFAULT_POSTS_DIR, help="Directory of <slug>.md posts")
    parser.add_argument("--output", default=DEFAULT_OUTPUT_DIR, help="Output site directory")
    parser.add_argument("--theme", default=DEFAULT_THEME, help="Pygments style for code blocks")
    parser.add_argument("--edit-url", default=None, help="Base URL for 'Edit on GitHub' links")
    args = parser.parse_args(argv)

    build_site(Path(args.posts), Path(args.output), theme=args.theme, edit_url=args.edit_url)


if __name__ == "__main__":
    main()
