from __future__ import annotations

from areto.core.markdown_renderer import MarkdownRenderer


def test_renders_markdown_fragment():
    html = MarkdownRenderer().render_fragment("What is **2+2**?")
    assert "<strong>2+2</strong>" in html


def test_empty_text_has_placeholder():
    assert "No content provided" in MarkdownRenderer().render_fragment("   ")


def test_raw_html_is_escaped_by_default():
    html = MarkdownRenderer().render_fragment("<script>alert(1)</script>")
    assert "<script>" not in html


def test_document_wraps_fragment_with_font_size():
    html = MarkdownRenderer().render_document("Hello", title="Quiz", font_size=18)
    assert html.startswith("<html>")
    assert "font-size: 18pt" in html
    assert "<p>Hello</p>" in html
