"""Spanish (es-ES) display formatting for API timestamps."""

from datetime import date, datetime, timezone, tzinfo

from pydantic import TypeAdapter, ValidationError

from clinic_dashboard.logging import setup_logging

logger = setup_logging()

INVALID_DATE = "Fecha inválida"
INVALID_TIME = "Hora inválida"

MONTHS = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)

WEEKDAYS = (
    "lunes",
    "martes",
    "miércoles",
    "jueves",
    "viernes",
    "sábado",
    "domingo",
)

_datetime_adapter = TypeAdapter(datetime)


def parse_date(value: str | datetime | None) -> datetime | None:
    """
    Parses an ISO 8601 timestamp into an aware datetime.

    Naive values are taken as UTC, which is what the API sends. Anything
    that cannot be parsed yields None instead of raising.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = _datetime_adapter.validate_python(value)
        except ValidationError:
            logger.warning("Invalid date format", extra={"value": str(value)})
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _localize(value: str | datetime | None, tz: tzinfo) -> datetime | None:
    parsed = parse_date(value)
    return parsed.astimezone(tz) if parsed else None


def _long_date(day: date) -> str:
    return f"{day.day} de {MONTHS[day.month - 1]} de {day.year}"


def format_date_time(value: str | datetime | None, tz: tzinfo = timezone.utc) -> str:
    """`15 de enero de 2025, 10:30`"""
    local = _localize(value, tz)
    if not local:
        return INVALID_DATE
    return f"{_long_date(local)}, {local:%H:%M}"


def format_date(value: str | datetime | None, tz: tzinfo = timezone.utc) -> str:
    """`15 de enero de 2025`"""
    local = _localize(value, tz)
    if not local:
        return INVALID_DATE
    return _long_date(local)


def format_time(value: str | datetime | None, tz: tzinfo = timezone.utc) -> str:
    """`10:30`"""
    local = _localize(value, tz)
    if not local:
        return INVALID_TIME
    return f"{local:%H:%M}"


def format_weekday_date(day: date) -> str:
    """`miércoles, 15 de enero de 2025` for a calendar date."""
    return f"{WEEKDAYS[day.weekday()]}, {_long_date(day)}"


def format_date_with_weekday(
    value: str | datetime | None, tz: tzinfo = timezone.utc
) -> str:
    """`miércoles, 15 de enero de 2025`"""
    local = _localize(value, tz)
    if not local:
        return INVALID_DATE
    return format_weekday_date(local.date())
