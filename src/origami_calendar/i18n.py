"""Localized user-facing strings.

Hebrew is the default locale; English is provided for operators and logs.
Unknown locales fall back to Hebrew, unknown keys raise ``KeyError``.
"""

from __future__ import annotations

from typing import Dict

DEFAULT_LOCALE = "he"

MESSAGES: Dict[str, Dict[str, str]] = {
    "he": {
        "default_title": "פגישה",
        "html_hint": "התקבל דף HTML במקום מידע. בדוק את כתובת ה-API והמפתח. ייתכן והמערכת מפנה לדף התחברות (login).",
        "missing_credential": "מפתח ה-API לא הוגדר בשרת. יש להגדיר את ORIGAMI_API_KEY ולהפעיל מחדש.",
        "auth_redirect": "המערכת הפנתה לדף התחברות. ייתכן שמפתח ה-API שגוי או פג תוקף.",
        "markup_content": "התקבל דף אינטרנט במקום נתונים. בדוק שכתובת ה-API מסתיימת ב-/api/v1.",
        "timeout": "השרת לא הגיב בזמן. נסה שוב מאוחר יותר.",
        "network": "שגיאת תקשורת עם השרת",
        "backend_message": "שגיאת אוריגמי: {message}",
        "unexpected": "שגיאה לא צפויה בטעינת הנתונים",
    },
    "en": {
        "default_title": "Meeting",
        "html_hint": "Received an HTML page instead of data. Check the API address and key; the backend may be redirecting to a login page.",
        "missing_credential": "The API key is not configured on the server. Set ORIGAMI_API_KEY and restart.",
        "auth_redirect": "The backend redirected to a login page. The API key may be wrong or expired.",
        "markup_content": "Received a web page instead of data. Check that the API address ends with /api/v1.",
        "timeout": "The server did not respond in time. Try again later.",
        "network": "Could not reach the server",
        "backend_message": "Origami error: {message}",
        "unexpected": "Unexpected error while loading events",
    },
}

MONTH_NAMES: Dict[str, tuple[str, ...]] = {
    "he": (
        "ינואר", "פברואר", "מרץ", "אפריל", "מאי", "יוני",
        "יולי", "אוגוסט", "ספטמבר", "אוקטובר", "נובמבר", "דצמבר",
    ),
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
}

WEEKDAY_NAMES: Dict[str, tuple[str, ...]] = {
    "he": ("ראשון", "שני", "שלישי", "רביעי", "חמישי", "שישי", "שבת"),
    "en": ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
}


def resolve_locale(locale: str | None) -> str:
    if locale and locale in MESSAGES:
        return locale
    return DEFAULT_LOCALE


def message(key: str, locale: str | None = None, **values: str) -> str:
    template = MESSAGES[resolve_locale(locale)][key]
    return template.format(**values) if values else template


def month_name(month: int, locale: str | None = None) -> str:
    return MONTH_NAMES[resolve_locale(locale)][month - 1]


def weekday_name(index: int, locale: str | None = None) -> str:
    """Name for a Sunday-based weekday index (0 = Sunday)."""
    return WEEKDAY_NAMES[resolve_locale(locale)][index]
