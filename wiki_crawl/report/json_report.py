# wiki_crawl/report/json_report.py

"""
Генерация JSON-отчёта для проекта wiki_crawl.

Сериализация объекта CrawlReport в файл.
"""
import json
from pathlib import Path

from wiki_crawl.engine import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект CrawlReport с итогом обхода
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)

    return output
