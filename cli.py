# cli.py

"""
Точка входа для запуска wiki_crawl без установки пакета.

Пример запуска:
    python cli.py --config configs/default.yaml crawl --max-steps 10
"""
from wiki_crawl.cli import cli

if __name__ == "__main__":
    cli()
