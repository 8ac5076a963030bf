"""Markdown rendering for question text shown in Qt text widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown into HTML fragments or small standalone documents.

    Raw HTML in the source is escaped unless ``enable_html`` is set, since
    question text comes from other users.
    """

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        sanitized = (markdown_text or "").strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_document(self, markdown_text: str, title: str = "Areto", font_size: int = 14) -> str:
        """Render markdown inside a minimal HTML document for QTextBrowser."""
        fragment = self.render_fragment(markdown_text)
        return (
            "<html><head>"
            f"<title>{html.escape(title)}</title>"
            f"<style>body {{ font-size: {font_size}pt; }}</style>"
            f"</head><body>{fragment}</body></html>"
        )


# Shared instance; MarkdownIt is cheap to reuse from the Qt thread.
renderer = MarkdownRenderer()
