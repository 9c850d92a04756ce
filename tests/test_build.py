from __future__ import annotations

from pathlib import Path

import pytest

from fenceblog.build import BlogConverter, build_site, main, ribbon_style
from fenceblog.posts import Post

POST = """---
title: Hello
date: 2024-01-02
description: First post
image: cover.png
tags: [javascript]
---
Some `inline` code.

```js {2}
const a = 1;
const b = 2;
```
"""


def _write_posts(posts_dir: Path) -> None:
    posts_dir.mkdir()
    (posts_dir / "hello.md").write_text(POST, encoding="utf-8")
    (posts_dir / "older.md").write_text(
        "---\ntitle: Older\ndate: 2023-06-01\ntags: [css]\n---\nText.\n", encoding="utf-8"
    )


def test_build_site_writes_pages_index_and_stylesheet(tmp_path: Path, capsys) -> None:
    posts_dir = tmp_path / "posts"
    output_dir = tmp_path / "site"
    _write_posts(posts_dir)

    written = build_site(posts_dir, output_dir)

    assert set(written) == {
        output_dir / "posts" / "hello.html",
        output_dir / "posts" / "older.html",
        output_dir / "index.html",
        output_dir / "404.html",
        output_dir / "highlight.css",
    }
    page = (output_dir / "posts" / "hello.html").read_text(encoding="utf-8")
    assert "<h1>Hello</h1>" in page
    assert "January 2, 2024" in page
    assert '<img src="hello/cover.png" alt="Hello" title="photo by unknown author">' in page
    assert '<code class="quote">inline</code>' in page
    assert 'class="line highlighted" data-line="1"' in page

    index = (output_dir / "index.html").read_text(encoding="utf-8")
    assert index.index("posts/hello.html") < index.index("posts/older.html")
    assert "JAVASCRIPT" in index

    assert ".line.highlighted" in (output_dir / "highlight.css").read_text(encoding="utf-8")
    assert f"Created {output_dir / 'index.html'}" in capsys.readouterr().out


def test_build_site_without_posts_exits(tmp_path: Path) -> None:
    (tmp_path / "posts").mkdir()
    with pytest.raises(SystemExit):
        build_site(tmp_path / "posts", tmp_path / "site")


def test_render_post_edit_link_and_escaping() -> None:
    converter = BlogConverter(edit_url="https://example.com/edit/main/posts/")
    post = Post(slug="x", title="A <b> title", tags=["a&b"], content="text\n")

    page = converter.render_post(post)

    assert "<h1>A &lt;b&gt; title</h1>" in page
    assert "<li>a&amp;b</li>" in page
    assert 'href="https://example.com/edit/main/posts/x.md"' in page


def test_main_parses_arguments(tmp_path: Path) -> None:
    posts_dir = tmp_path / "posts"
    output_dir = tmp_path / "out"
    _write_posts(posts_dir)

    main(["--posts", str(posts_dir), "--output", str(output_dir), "--theme", "monokai"])

    assert (output_dir / "posts" / "hello.html").exists()
    assert ".highlight" in (output_dir / "highlight.css").read_text(encoding="utf-8")


def test_index_cards_show_image_and_ribbon_colors(tmp_path: Path) -> None:
    posts_dir = tmp_path / "posts"
    _write_posts(posts_dir)
    (posts_dir / "rusty.md").write_text(
        "---\ntitle: Rusty\ndate: 2022-01-01\ntags: [rust]\n---\nText.\n", encoding="utf-8"
    )
    (posts_dir / "typed.md").write_text(
        "---\ntitle: Typed\ndate: 2021-01-01\ntags: [typescript]\n---\nText.\n", encoding="utf-8"
    )
    build_site(posts_dir, tmp_path / "site")

    index = (tmp_path / "site" / "index.html").read_text(encoding="utf-8")
    assert '<a href="posts/hello.html" class="card-link"><img src="posts/hello/cover.png" alt="Hello">' in index
    assert '<div class="ribbon" style="background-color: var(--color-css)">CSS</div>' in index
    # unknown tags borrow the javascript color, dark tags get white text
    assert '<div class="ribbon" style="background-color: var(--color-javascript)">RUST</div>' in index
    assert (
        '<div class="ribbon" style="background-color: var(--color-typescript); '
        'color: var(--color-white)">TYPESCRIPT</div>'
    ) in index


def test_ribbon_style() -> None:
    assert ribbon_style("javascript") == "background-color: var(--color-javascript)"
    assert ribbon_style("python") == "background-color: var(--color-python); color: var(--color-white)"
    assert ribbon_style("cobol") == "background-color: var(--color-javascript)"


def test_build_site_writes_not_found_page(tmp_path: Path) -> None:
    posts_dir = tmp_path / "posts"
    _write_posts(posts_dir)
    build_site(posts_dir, tmp_path / "site")

    page = (tmp_path / "site" / "404.html").read_text(encoding="utf-8")
    assert "<h2>Not Found</h2>" in page
    assert '<a href="/index.html">Return Home</a>' in page


def test_render_post_credits_photographer() -> None:
    post = Post(slug="x", title="X", image="pic.jpg", photo_by="Jane Doe", content="text\n")
    page = BlogConverter().render_post(post)

    assert '<img src="x/pic.jpg" alt="X" title="photo by Jane Doe">' in page


def test_theme_only_changes_the_stylesheet(tmp_path: Path) -> None:
    posts_dir = tmp_path / "posts"
    _write_posts(posts_dir)
    build_site(posts_dir, tmp_path / "dark", theme="monokai")
    build_site(posts_dir, tmp_path / "light", theme="default")

    def read(site: str, name: str) -> str:
        return (tmp_path / site / name).read_text(encoding="utf-8")

    assert read("dark", "highlight.css") != read("light", "highlight.css")
    assert read("dark", "posts/hello.html") == read("light", "posts/hello.html")
