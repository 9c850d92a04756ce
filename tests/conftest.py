from __future__ import annotations

import html
import re

import pytest

LINE_RE = re.compile(r'<span class="(line(?: highlighted)?)" data-line="(\d+)">(.*?)</span>\n')


def _lines(markup: str) -> list[tuple[int, str, bool]]:
    """(index, plain text, highlighted) for every line wrapper in markup."""
    return [
        (int(index), html.unescape(re.sub(r"<[^>]+>", "", inner)), classes == "line highlighted")
        for classes, index, inner in LINE_RE.findall(markup)
    ]


@pytest.fixture
def code_lines():
    return _lines
