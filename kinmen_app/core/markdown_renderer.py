"""Markdown rendering helpers shared by the Qt viewer and the web API.

Slide notes are authored in Markdown. Both the desktop notes pane and the
``/slides`` endpoint render them through the same instance so that teachers
and students see identical HTML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html

from markdown_it import MarkdownIt


@dataclass(slots=True)
class MarkdownRenderer:
    """Converts markdown into HTML fragments or full documents."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No notes for this slide.</em></p>"
        return self._markdown.render(sanitized)

    def render_full_document(self, markdown_text: str, title: str = "Kinmen") -> str:
        fragment = self.render_fragment(markdown_text)
        return f"""<!doctype html>
<html lang=\"zh-Hant\">
  <head>
    <meta charset=\"utf-8\" />
    <title>{html.escape(title)}</title>
    <style>
      body {{ font-family: 'Noto Sans TC', 'Segoe UI', sans-serif; margin: 0; padding: 1rem; line-height: 1.6; }}
    </style>
  </head>
  <body>
    <div class=\"slide-notes\">{fragment}</div>
  </body>
</html>"""


renderer = MarkdownRenderer()
# Shared instance; MarkdownIt renders are read-only so the API thread and the
# Qt thread can both use it.
