"""Pure derivations over fetched collections: joins, filters, grouping."""

from collections.abc import Callable, Iterable
from datetime import date, datetime, time, tzinfo
from typing import Literal

from pydantic import BaseModel

from clinic_dashboard.domain.enums import AppointmentStatus
from clinic_dashboard.domain.models import Appointment, DashboardSummary, Patient, Session
from clinic_dashboard.utils.dates import format_weekday_date

UNKNOWN_PATIENT = "Paciente desconocido"
DEFAULT_UPCOMING_LIMIT = 5

AppointmentPredicate = Callable[[Appointment], bool]


def find_patient(patients: Iterable[Patient], patient_id: str) -> Patient | None:
    """Linear lookup; collections are small enough not to warrant an index."""
    for patient in patients:
        if patient.id == patient_id:
            return patient
    return None


def patient_full_name(
    patients: Iterable[Patient], patient_id: str, placeholder: str = UNKNOWN_PATIENT
) -> str:
    """Resolves a foreign key to a display name, tolerating dangling ids."""
    patient = find_patient(patients, patient_id)
    return patient.full_name if patient else placeholder


def status_in(statuses: Iterable[AppointmentStatus]) -> AppointmentPredicate:
    """Builds a predicate accepting appointments whose status is in `statuses`."""
    accepted = frozenset(statuses)
    return lambda appointment: appointment.status in accepted


def upcoming_appointments(
    appointments: Iterable[Appointment],
    now: datetime,
    is_active: AppointmentPredicate,
    limit: int = DEFAULT_UPCOMING_LIMIT,
) -> list[Appointment]:
    """
    Selects the next appointments for the dashboard widget.

    Args:
        appointments: The full appointment collection.
        now: Current instant (timezone-aware).
        is_active: Which statuses count as upcoming; decided by the caller.
        limit: Maximum number of entries returned.

    Returns:
        Active appointments starting at or after `now`, earliest first.
    """
    pending = [a for a in appointments if a.starts_at >= now and is_active(a)]
    pending.sort(key=lambda a: a.starts_at)
    return pending[:limit]


class AppointmentFilter(BaseModel):
    """Agenda filter criteria; unset criteria do not filter."""

    patient_id: str | None = None
    status: AppointmentStatus | Literal["all"] = "all"
    date_from: date | None = None
    date_to: date | None = None

    def lower_bound(self, tz: tzinfo) -> datetime | None:
        if self.date_from is None:
            return None
        return datetime.combine(self.date_from, time.min, tzinfo=tz)

    def upper_bound(self, tz: tzinfo) -> datetime | None:
        # inclusive of the whole day: 23:59:59.999 local
        if self.date_to is None:
            return None
        return datetime.combine(self.date_to, time(23, 59, 59, 999000), tzinfo=tz)


def filter_appointments(
    appointments: Iterable[Appointment], criteria: AppointmentFilter, tz: tzinfo
) -> list[Appointment]:
    """Keeps the appointments that satisfy every active criterion."""
    lower = criteria.lower_bound(tz)
    upper = criteria.upper_bound(tz)

    def matches(appointment: Appointment) -> bool:
        if criteria.patient_id and appointment.patient_id != criteria.patient_id:
            return False
        if criteria.status != "all" and appointment.status != criteria.status:
            return False
        if lower is not None and appointment.starts_at < lower:
            return False
        if upper is not None and appointment.starts_at > upper:
            return False
        return True

    return [a for a in appointments if matches(a)]


class DayGroup(BaseModel):
    """Appointments sharing a local calendar date, in source order."""

    day: date
    heading: str
    appointments: list[Appointment]


def group_by_day(appointments: Iterable[Appointment], tz: tzinfo) -> list[DayGroup]:
    """Buckets appointments by local start date, buckets in ascending order."""
    buckets: dict[date, list[Appointment]] = {}
    for appointment in appointments:
        day = appointment.starts_at.astimezone(tz).date()
        buckets.setdefault(day, []).append(appointment)

    groups = []
    for day in sorted(buckets):
        heading = format_weekday_date(day)
        groups.append(
            DayGroup(
                day=day,
                heading=heading[:1].upper() + heading[1:],
                appointments=buckets[day],
            )
        )
    return groups


def search_patients(patients: Iterable[Patient], term: str) -> list[Patient]:
    """Matches name, surname and email case-insensitively, phone verbatim."""
    needle = term.lower()
    return [
        p
        for p in patients
        if needle in p.first_name.lower()
        or needle in p.last_name.lower()
        or needle in p.email.lower()
        or term in p.phone
    ]


def search_sessions(
    sessions: Iterable[Session], patients: list[Patient], term: str
) -> list[Session]:
    """Matches sessions by the joined patient name."""
    needle = term.lower()
    return [
        s
        for s in sessions
        if needle in patient_full_name(patients, s.patient_id).lower()
    ]


class StatsCard(BaseModel):
    label: str
    value: str
    caption: str


_STATS = (
    ("Pacientes", "total_patients", "-"),
    ("Citas Hoy", "appointments_today", "0"),
    ("Sesiones", "total_sessions", "-"),
    ("Próxima Cita", "next_appointment", "0"),
)


def build_stats_cards(summary: DashboardSummary | None) -> list[StatsCard]:
    """Renders the four dashboard counters, with placeholders for gaps."""
    cards = []
    for label, attribute, fallback in _STATS:
        value = getattr(summary, attribute, None) if summary else None
        cards.append(
            StatsCard(
                label=label,
                value=fallback if value is None else str(value),
                caption="Próximas 24h" if attribute == "next_appointment" else "Total",
            )
        )
    return cards
