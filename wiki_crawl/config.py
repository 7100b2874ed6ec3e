"""
Модуль для загрузки и валидации конфигурации краулера wiki_crawl.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)

__all__ = ["CrawlerConfig", "load_config", "DEFAULT_SEED"]

DEFAULT_SEED = "https://en.wikipedia.org/wiki/Java_(programming_language)"


class CrawlerConfig(BaseModel):
    """Конфигурация одной сессии обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True, validate_default=True)

    seed_url: str = Field(DEFAULT_SEED, min_length=1, description="Стартовая страница обхода.")
    origin: HttpUrl = Field("https://en.wikipedia.org", description="Origin сайта для внутренних ссылок.")
    link_prefix: str = Field("/wiki/", description="Префикс пути внутренних ссылок.")
    content_selector: str = Field("#mw-content-text", min_length=1, description="CSS-селектор основного контента.")
    block_selector: str = Field("p", min_length=1, description="CSS-селектор блоков (абзацев) внутри контента.")
    snapshot_dir: Path = Field(Path("resources"), description="Каталог офлайн-снимков страниц.")
    redis_url: str = Field("redis://localhost:6379/0", description="Адрес Redis для индекса.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("WikiCrawlBot/1.0", min_length=1, description="Заголовок User-Agent.")
    max_steps: Optional[int] = Field(None, ge=1, description="Лимит шагов обхода за один запуск.")
    report_term: str = Field("the", min_length=1, description="Термин для итогового отчёта.")
    preload_seed_links: bool = Field(True, description="Заранее поставить в очередь ссылки стартовой страницы.")

    @field_validator("report_term")
    def _lower_term(cls, v: str) -> str:
        return v.lower()

    @field_validator("link_prefix")
    def _check_prefix(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("link_prefix must start with '/'")
        return v

    @property
    def origin_str(self) -> str:
        """Origin без завершающего слеша, пригодный для конкатенации с href."""
        return str(self.origin).rstrip("/")


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути берёт configs/default.yaml, а если его нет — значения по умолчанию.
    Явно указанный, но отсутствующий файл — FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)
