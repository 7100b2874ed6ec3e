"""wiki_crawl.report: Генерация отчётов об обходе (JSON и HTML)."""

from wiki_crawl.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from wiki_crawl.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
