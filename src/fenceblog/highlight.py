"""
Code block rendering - Pygments tokens, one wrapper element per line
"""

from contextlib import contextmanager
from html import escape
from typing import Iterator

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from .annotations import DEFAULT_LANGUAGE, AnnotationCursor, BlockAnnotation

DEFAULT_THEME = "material"

HIGHLIGHTED_LINE_CSS = '''
.highlight .line { display: inline-block; width: 100%; }
.highlight .line.highlighted { background-color: rgba(255, 255, 255, 0.08); }
code.quote { padding: 0.1em 0.3em; border-radius: 4px; }
'''


class LineFormatter(HtmlFormatter):
    """HtmlFormatter that wraps every line in <span class="line" data-line="N">.

    Line numbers start at 0, the same base the range decoder produces.
    """

    def __init__(self, language: str, highlighted_lines: frozenset = frozenset(), **options):
        options.setdefault('cssclass', 'codeblock')
        super().__init__(**options)
        self.language = language
        self.highlighted_lines = highlighted_lines

    def wrap(self, source):
        yield 0, f'<pre><code class="lang-{escape(self.language)} highlight">'
        index = 0
        for is_code, line in source:
            if not is_code:
                yield is_code, line
                continue
            classes = 'line highlighted' if index in self.highlighted_lines else 'line'
            content = line[:-1] if line.endswith('\n') else line
            yield 1, f'<span class="{classes}" data-line="{index}">{content}</span>\n'
            index += 1
        yield 0, '</code></pre>'


class Highlighter:
    """Lexer cache for a single render.

    Lexers are registered the first time a language is asked for; unknown
    languages fall back to the default language.
    """

    def __init__(self, default_language: str = DEFAULT_LANGUAGE):
        self.default_language = default_language
        self._lexers = {}

    def lexer_for(self, language: str):
        if language not in self._lexers:
            self._lexers[language] = self._load_lexer(language)
        return self._lexers[language]

    def _load_lexer(self, language: str):
        try:
            return get_lexer_by_name(language, stripnl=False)
        except ClassNotFound:
            print(f"Warning: No lexer for '{language}', falling back to '{self.default_language}'")

        try:
            return get_lexer_by_name(self.default_language, stripnl=False)
        except ClassNotFound:
            return TextLexer(stripnl=False)

    def highlight_block(self, code: str, annotation: BlockAnnotation) -> str:
        """Render a multi-line block, marking the annotation's lines."""
        formatter = LineFormatter(annotation.language, annotation.highlighted_lines)
        return highlight(code, self.lexer_for(annotation.language), formatter)

    def close(self):
        self._lexers.clear()


@contextmanager
def acquire_highlighter(default_language: str = DEFAULT_LANGUAGE) -> Iterator[Highlighter]:
    highlighter = Highlighter(default_language)
    try:
        yield highlighter
    finally:
        highlighter.close()


def render_code(code: str, cursor: AnnotationCursor, highlighter: Highlighter) -> str:
    """Render inline code as-is, multi-line code with the next annotation."""
    if '\n' not in code:
        return f'<code class="quote">{escape(code)}</code>'

    return highlighter.highlight_block(code, cursor.next())


def stylesheet(theme: str = DEFAULT_THEME) -> str:
    """CSS for the token classes of a Pygments style plus the line markers."""
    try:
        formatter = HtmlFormatter(style=theme)
    except ClassNotFound:
        print(f"Warning: Unknown theme '{theme}', using the default style")
        formatter = HtmlFormatter()
    return formatter.get_style_defs('.highlight') + HIGHLIGHTED_LINE_CSS
