from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import date
from typing import List, Optional

from .bootstrap import configure_logging
from .config import AppSettings, ConfigStore, get_settings
from .domain import Configuration, ViewMode
from .layout import ViewLayout
from .layout.grid import sunday_index
from .i18n import weekday_name
from .services import CalendarController, InProcessGateway, ProxyForwarder, RemoteProxyClient, SearchGateway

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Origami calendar command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the search proxy HTTP server.")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    configure_parser = subparsers.add_parser("configure", help="Save the Origami connection settings.")
    configure_parser.add_argument("--base-url", required=True)
    configure_parser.add_argument("--collection-id", required=True)
    configure_parser.add_argument("--api-key", default=None, help="Used only when no proxy URL is configured.")

    agenda_parser = subparsers.add_parser("agenda", help="Fetch slots and print them for a view.")
    agenda_parser.add_argument("--view", choices=[mode.value for mode in ViewMode], default=None)
    agenda_parser.add_argument("--date", type=date.fromisoformat, default=None)
    agenda_parser.add_argument("--proxy-url", default=None)

    return parser


def _build_gateway(settings: AppSettings, config: Configuration, proxy_url: Optional[str]) -> SearchGateway:
    url = proxy_url or settings.proxy.proxy_url
    if url:
        return RemoteProxyClient(proxy_url=url, timeout=settings.proxy.timeout)
    return InProcessGateway(ProxyForwarder(settings=settings, credential=config.credential or settings.origami.api_key))


def render_layout(layout: ViewLayout, locale: Optional[str] = None) -> List[str]:
    lines: List[str] = []
    if layout.cells:
        for cell in layout.cells:
            if cell is None or not cell.events:
                continue
            lines.append(cell.day.isoformat())
            lines.extend(f"  {event.start:%H:%M} {event.title}" for event in cell.events)
        return lines
    for column in layout.columns:
        lines.append(f"{weekday_name(sunday_index(column.day), locale)} {column.day.isoformat()}")
        for placed in column.events:
            event = placed.event
            lines.append(f"  {event.start:%H:%M}-{event.end:%H:%M} {event.title}")
    return lines


async def _agenda(args: argparse.Namespace, settings: AppSettings) -> int:
    store = ConfigStore()
    config = store.load()
    controller = CalendarController(
        gateway=_build_gateway(settings, config, args.proxy_url),
        settings=settings,
        store=store,
        config=config,
    )
    if args.view:
        controller.change_view(args.view)
    if args.date:
        controller.current_date = args.date

    result = await controller.refresh()
    print(controller.title())
    if result.error:
        print(result.error)
    for line in render_layout(controller.layout(), controller.locale):
        print(line)
    return 0 if result.ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    logger.info("Origami calendar CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()

    if args.command == "serve":
        from .services.http import run_local_server

        run_local_server(host=args.host or settings.proxy.host, port=args.port or settings.proxy.port)
        return 0
    if args.command == "configure":
        store = ConfigStore()
        store.save(Configuration(base_url=args.base_url, collection_id=args.collection_id, credential=args.api_key))
        print(f"Saved connection settings to {store.path}")
        return 0
    if args.command == "agenda":
        return asyncio.run(_agenda(args, settings))
    parser.print_help()  # pragma: no cover - argparse enforces choices
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
