# ui/markdown_renderer.py
# -*- coding: utf-8 -*-

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from markdown import markdown


@dataclass(frozen=True)
class MarkdownTheme:
    text: str = "#111827"
    muted: str = "#6B7280"
    border: str = "#E5E7EB"
    panel: str = "#FFFFFF"
    link: str = "#2563EB"


class MarkdownRenderer:
    """
    Break card text: Markdown -> HTML page for tkinterweb.

    tkhtml only understands a subset of HTML, so task list checkboxes are
    turned into unicode glyphs before rendering.
    """

    _task_unchecked = re.compile(r"^(\s*[-*+]\s+)\[ \]\s+", re.MULTILINE)
    _task_checked = re.compile(r"^(\s*[-*+]\s+)\[(x|X)\]\s+", re.MULTILINE)

    def __init__(self, theme: Optional[MarkdownTheme] = None):
        self.theme = theme or MarkdownTheme()

    def preprocess(self, md_text: str) -> str:
        if not md_text:
            return ""
        out = self._task_checked.sub("\\1☑ ", md_text)
        return self._task_unchecked.sub("\\1☐ ", out)

    def extensions(self) -> Tuple[List[str], Dict]:
        exts = [
            "sane_lists",
            "nl2br",
            "pymdownx.tilde",
            "pymdownx.magiclink",
        ]
        return exts, {}

    def css(self) -> str:
        t = self.theme
        return f"""
        body {{
          font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif;
          margin: 8px 24px;
          color: {t.text};
          background: {t.panel};
          font-size: 15px;
          line-height: 1.55;
          text-align: center;
        }}
        p {{ margin: 0.5em 0; }}
        strong {{ font-weight: 700; }}
        a {{ color: {t.link}; text-decoration: none; }}
        ul {{ list-style: none; padding-left: 0; margin: 0.6em 0; color: {t.muted}; }}
        li {{ margin: 0.3em 0; }}
        hr {{ border: 0; border-top: 1px solid {t.border}; margin: 1em 0; }}
        """

    def to_html(self, md_text: str) -> str:
        exts, cfg = self.extensions()
        body = markdown(
            self.preprocess(md_text or ""),
            extensions=exts,
            extension_configs=cfg,
            output_format="html5",
        )
        return f"""
        <html>
          <head>
            <meta charset="utf-8"/>
            <style>{self.css()}</style>
          </head>
          <body>{body}</body>
        </html>
        """
