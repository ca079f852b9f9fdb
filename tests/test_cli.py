from datetime import date, datetime, timedelta

import pytest

from origami_calendar import cli
from origami_calendar.config import ConfigStore
from origami_calendar.domain import CalendarEvent, Configuration
from origami_calendar.layout import layout_view
from origami_calendar.services import InProcessGateway, RemoteProxyClient
from origami_calendar.services.demo import demo_events


def _event(identifier, start, minutes=60):
    return CalendarEvent(id=identifier, title=identifier, start=start, end=start + timedelta(minutes=minutes))


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_agenda_arguments():
    args = cli.build_parser().parse_args(["agenda", "--view", "month", "--date", "2024-06-15"])

    assert args.view == "month"
    assert args.date == date(2024, 6, 15)


def test_gateway_choice(settings_factory):
    settings = settings_factory()
    config = Configuration(base_url="https://x", collection_id="e_1")

    assert isinstance(cli._build_gateway(settings, config, "https://proxy/api/proxy"), RemoteProxyClient)
    assert isinstance(cli._build_gateway(settings, config, None), InProcessGateway)


def test_render_week_layout():
    event = _event("Fitting", datetime(2024, 6, 12, 9, 30))

    lines = cli.render_layout(layout_view(date(2024, 6, 12), "week", [event]), "en")

    assert lines[0] == "Sunday 2024-06-09"
    assert "  09:30-10:30 Fitting" in lines
    assert len([line for line in lines if not line.startswith("  ")]) == 7


def test_render_month_layout_skips_empty_days():
    event = _event("Pickup", datetime(2024, 6, 3, 8, 0))

    lines = cli.render_layout(layout_view(date(2024, 6, 1), "month", [event]), "en")

    assert lines == ["2024-06-03", "  08:00 Pickup"]


def test_configure_command_writes_store(tmp_path, monkeypatch):
    path = tmp_path / "connection.json"
    monkeypatch.setattr(cli, "ConfigStore", lambda: ConfigStore(path))

    code = cli.main(["configure", "--base-url", "https://acme.origami.ms/api/v1", "--collection-id", "e_7"])

    assert code == 0
    assert ConfigStore(path).load().collection_id == "e_7"


def test_demo_events_sit_inside_reference_week():
    events = demo_events(date(2024, 6, 12))

    assert len({event.id for event in events}) == len(events)
    assert all(date(2024, 6, 9) <= event.start.date() <= date(2024, 6, 15) for event in events)
    assert all(event.end > event.start for event in events)
