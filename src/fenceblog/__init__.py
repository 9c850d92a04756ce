from .annotations import (
    CODE_BLOCK_HEADER_RE,
    DEFAULT_ANNOTATION,
    AnnotationCursor,
    BlockAnnotation,
    decode_ranges,
    scan_headers,
)
from .extension import CodeFenceExtension, render_markdown
from .highlight import Highlighter, acquire_highlighter, render_code, stylesheet

__version__ = "0.1.0"
