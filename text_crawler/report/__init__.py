"""text_crawler.report: Итоговые отчёты об обходе, используемые CLI и тестами."""

from .json_report import render_json

__all__ = ["render_json"]
