from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from ..domain import CalendarEvent, FetchResult, RawRecord
from ..domain.models import scalar_extensions
from ..i18n import message

logger = logging.getLogger(__name__)

FIELD_ID = "_id"
FIELD_TITLE = "title"
FIELD_START = "fld_1544"
FIELD_END = "fld_1545"

DEFAULT_DISPLAY_HINT = "primary"
DETAILS_PREVIEW_LENGTH = 200

Envelope = Mapping[str, Any]


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a backend timestamp into a naive host-local datetime, or None."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _random_token() -> str:
    return uuid4().hex[:9]


def _has_value(record: Mapping[str, Any], key: str) -> bool:
    value = record.get(key)
    return value is not None and value != ""


def map_to_events(records: Iterable[RawRecord], *, locale: Optional[str] = None) -> List[CalendarEvent]:
    """Convert raw backend records into calendar events, dropping malformed ones."""

    events: list[CalendarEvent] = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.debug("Dropping non-object record: %r", record)
            continue
        if not (_has_value(record, FIELD_START) and _has_value(record, FIELD_END)):
            continue
        start = parse_timestamp(record[FIELD_START])
        end = parse_timestamp(record[FIELD_END])
        if start is None or end is None:
            logger.debug(
                "Dropping record %s with unparseable times: %r / %r",
                record.get(FIELD_ID),
                record[FIELD_START],
                record[FIELD_END],
            )
            continue

        identifier = record.get(FIELD_ID)
        title = record.get(FIELD_TITLE)
        events.append(
            CalendarEvent(
                id=str(identifier) if _has_value(record, FIELD_ID) else _random_token(),
                title=str(title) if title else message("default_title", locale),
                start=start,
                end=end,
                display_hint=DEFAULT_DISPLAY_HINT,
                extensions=scalar_extensions(record),
            )
        )
    return events


def extract_records(payload: Envelope) -> List[RawRecord]:
    records = payload.get("items")
    if records is None:
        records = payload.get("data")
    if not isinstance(records, list):
        return []
    return records


# ------------------------------------------------------------------ error classification


def _details_text(envelope: Envelope) -> str:
    details = envelope.get("details")
    return "" if details is None else str(details).lower()


def _contains_any(markers: Sequence[str]) -> Callable[[str], bool]:
    def predicate(text: str) -> bool:
        return any(marker in text for marker in markers)

    return predicate


mentions_missing_credential = _contains_any(("origami_api_key", "api key is not configured"))
mentions_login = _contains_any(("login", "sign in", "unauthorized", "התחברות"))
mentions_markup = _contains_any(("<html", "<!doctype", "html"))


@dataclass(frozen=True)
class ErrorRule:
    name: str
    matches: Callable[[Envelope], bool]
    message_key: str


def _on_details(predicate: Callable[[str], bool]) -> Callable[[Envelope], bool]:
    return lambda envelope: predicate(_details_text(envelope))


def _error_is(*names: str) -> Callable[[Envelope], bool]:
    return lambda envelope: str(envelope.get("error")) in names


ERROR_RULES: tuple[ErrorRule, ...] = (
    ErrorRule("missing_credential", _on_details(mentions_missing_credential), "missing_credential"),
    ErrorRule("auth_redirect", _on_details(mentions_login), "auth_redirect"),
    ErrorRule("markup_content", _on_details(mentions_markup), "markup_content"),
    ErrorRule("timeout", _error_is("Proxy Timeout"), "timeout"),
    ErrorRule("network", _error_is("Proxy Fatal Error", "Proxy Unreachable"), "network"),
)


def classify_error(envelope: Envelope, *, locale: Optional[str] = None) -> str:
    """Turn a failure envelope into a localized message; the first matching rule wins."""

    for rule in ERROR_RULES:
        if rule.matches(envelope):
            return message(rule.message_key, locale)

    error = str(envelope.get("error") or message("unexpected", locale))
    details = envelope.get("details")
    if not details:
        return error
    return f"{error}: {str(details)[:DETAILS_PREVIEW_LENGTH]}"


def to_fetch_result(envelope: Envelope, *, locale: Optional[str] = None) -> FetchResult:
    if envelope.get("error") is not None:
        logger.error("Search failed: %s", envelope)
        return FetchResult(error=classify_error(envelope, locale=locale))

    if envelope.get("message") and "items" not in envelope and "data" not in envelope:
        return FetchResult(error=message("backend_message", locale, message=str(envelope["message"])))

    records = extract_records(envelope)
    events = map_to_events(records, locale=locale)
    dropped = len(records) - len(events)
    if dropped:
        logger.info("Dropped %d of %d records without usable start/end times", dropped, len(records))
    return FetchResult(events=tuple(events))
