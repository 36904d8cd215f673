# text_crawler/report/json_report.py

"""
Генерация JSON-отчёта для проекта TextCrawler.

Сериализация объекта CrawlResult в файл.
"""
import json
from pathlib import Path

from text_crawler.crawler.models import CrawlResult


def render_json(result: CrawlResult, output_path: Path | str) -> Path:
    """
    Сохраняет итог обхода result в формате JSON по указанному пути.

    :param result: объект CrawlResult с данными обхода
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from text_crawler.report.json_report import render_json
    report_path = render_json(result, 'reports/crawl.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    with output.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)

    return output
