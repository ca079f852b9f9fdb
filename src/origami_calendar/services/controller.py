from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Tuple, Union

from ..config import AppSettings, ConfigStore, get_settings
from ..domain import (
    CalendarEvent,
    Configuration,
    ControllerState,
    FetchResult,
    NavigationDirection,
    ViewMode,
)
from ..i18n import message
from ..layout import ViewLayout, advance, header_title, layout_view
from .demo import demo_events
from .gateway import SearchGateway
from .mapper import to_fetch_result

logger = logging.getLogger(__name__)


@dataclass
class CalendarController:
    """Holds the calendar's date, view and events and reacts to discrete commands.

    Each refresh is tagged with a sequence number; only the response to the most
    recently issued refresh is applied, earlier ones are discarded on arrival.
    """

    gateway: SearchGateway
    settings: AppSettings = field(default_factory=get_settings)
    store: Optional[ConfigStore] = None
    config: Configuration = field(default_factory=Configuration)
    today: Callable[[], date] = date.today
    current_date: date = field(init=False)
    view: ViewMode = field(init=False)
    state: ControllerState = field(init=False, default=ControllerState.UNCONFIGURED)
    events: Tuple[CalendarEvent, ...] = field(init=False, default=())
    error: Optional[str] = field(init=False, default=None)
    _issued: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        self.current_date = self.today()
        self.view = ViewMode(self.settings.ui.default_view)
        if self.store is not None and not self.config.is_configured:
            self.config = self.store.load()
        self.state = ControllerState.READY if self.config.is_configured else ControllerState.UNCONFIGURED

    @property
    def locale(self) -> str:
        return self.settings.ui.locale

    @property
    def is_loading(self) -> bool:
        return self.state is ControllerState.LOADING

    # ------------------------------------------------------------------ commands

    async def save_config(self, config: Configuration) -> FetchResult:
        # Any refresh still in flight belongs to the previous connection.
        self._issued += 1
        self.config = config
        if self.store is not None:
            self.store.save(config)
        self.error = None
        if not config.is_configured:
            self.state = ControllerState.UNCONFIGURED
            self.events = ()
            return FetchResult()
        self.state = ControllerState.READY
        return await self.refresh()

    async def refresh(self) -> FetchResult:
        if not self.config.is_configured:
            logger.debug("Refresh skipped: no connection configured")
            self.state = ControllerState.UNCONFIGURED
            return FetchResult(events=self.events, error=self.error)

        self._issued += 1
        sequence = self._issued
        self.state = ControllerState.LOADING
        self.error = None

        try:
            envelope = await self.gateway.search(self.config)
            result = to_fetch_result(envelope, locale=self.locale)
        except Exception:  # noqa: BLE001
            logger.exception("Refresh %d failed unexpectedly", sequence)
            result = FetchResult(error=message("unexpected", self.locale))

        if sequence != self._issued:
            logger.debug("Discarding stale refresh %d (latest is %d)", sequence, self._issued)
            return result

        self._apply(result)
        return result

    def navigate(self, direction: Union[NavigationDirection, int]) -> date:
        self.current_date = advance(self.current_date, self.view, direction)
        return self.current_date

    def go_today(self) -> date:
        self.current_date = self.today()
        return self.current_date

    def change_view(self, view: Union[ViewMode, str]) -> ViewMode:
        self.view = ViewMode(view)
        return self.view

    # ------------------------------------------------------------------ render prep

    def layout(self) -> ViewLayout:
        return layout_view(self.current_date, self.view, self.events)

    def title(self) -> str:
        return header_title(self.current_date, self.view, self.locale)

    def _apply(self, result: FetchResult) -> None:
        if result.ok:
            self.events = result.events
            self.error = None
            self.state = ControllerState.READY
            logger.info("Loaded %d events", len(result.events))
            return
        self.error = result.error
        self.events = demo_events(self.current_date) if self.settings.ui.demo_fallback else ()
        self.state = ControllerState.ERROR
