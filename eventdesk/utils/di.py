from typing import Optional, TypeVar

from config import Config
from eventdesk.services.container import ServiceContainer

T = TypeVar("T")

_config: Optional[Config] = None
_services: Optional[ServiceContainer] = None


def set_config(config: Config) -> None:
    global _config
    _config = config


def set_services(container: ServiceContainer) -> None:
    global _services
    _services = container


def get_config() -> Config:
    return _require(_config, "Config")


def get_services() -> ServiceContainer:
    return _require(_services, "Services")


def is_organizer(telegram_id: int) -> bool:
    return telegram_id in get_config().bot.admin_ids


def _require(value: Optional[T], name: str) -> T:
    if value is None:
        raise RuntimeError(f"{name} not initialized; call set_config/set_services at startup")
    return value
