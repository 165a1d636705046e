"""
Application Context.

Everything the request handlers share, built once at startup and kept on
app.state.context: configuration values, the store, the entry service and
the blog controller.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from blogpad.backend.core.config import get_app_config, get_data_dir
from blogpad.backend.core.logging import get_logger
from blogpad.backend.core.utils import utc_now
from blogpad.backend.repositories.entry import EntryRepository
from blogpad.backend.services.entry import EntryService
from blogpad.backend.storage import KeyValueStore, create_store
from blogpad.backend.web.controller import BlogController, DisplayOptions

logger = get_logger(__name__)


@dataclass
class AppContext:
    store: KeyValueStore
    service: EntryService
    controller: BlogController
    display: DisplayOptions

    @classmethod
    def build(
        cls,
        store: KeyValueStore,
        entries_key: str = "blogs",
        display: DisplayOptions | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> "AppContext":
        """Wire repository, service and controller around a store."""
        display = display or DisplayOptions()
        service = EntryService(EntryRepository(store, entries_key), clock=clock)
        controller = BlogController(service, display)
        return cls(store=store, service=service, controller=controller, display=display)


def create_context() -> AppContext:
    """Build the context described by storage.yaml and display.yaml."""
    app_config = get_app_config()
    storage = app_config.storage
    display = app_config.display

    store = create_store(storage.backend, get_data_dir())
    context = AppContext.build(
        store,
        entries_key=storage.entries_key,
        display=DisplayOptions(
            page_title=display.page_title,
            locale=display.locale,
            timezone=display.timezone,
        ),
    )
    logger.info(
        "Application context ready",
        extra={
            "backend": storage.backend,
            "entries_key": storage.entries_key,
            "entries": len(context.service.entries),
        },
    )
    return context
