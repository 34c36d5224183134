"""Appointment enumerations, transmitted as integers."""

from enum import IntEnum

UNKNOWN_LABEL = "Desconocido"


class AppointmentMode(IntEnum):
    IN_PERSON = 0
    ONLINE = 1

    @property
    def label(self) -> str:
        return _MODE_LABELS[self]


class AppointmentStatus(IntEnum):
    PENDING = 0
    CONFIRMED = 1
    CANCELLED = 2
    COMPLETED = 3
    NO_SHOW = 4

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_MODE_LABELS = {
    AppointmentMode.IN_PERSON: "Presencial",
    AppointmentMode.ONLINE: "Online",
}

_STATUS_LABELS = {
    AppointmentStatus.PENDING: "Pendiente",
    AppointmentStatus.CONFIRMED: "Confirmada",
    AppointmentStatus.CANCELLED: "Cancelada",
    AppointmentStatus.COMPLETED: "Completada",
    AppointmentStatus.NO_SHOW: "No asistió",
}


def mode_label(mode: int) -> str:
    """Spanish label for a mode as stored, including values the enum lacks."""
    return _MODE_LABELS.get(mode, UNKNOWN_LABEL)


def status_label(status: int) -> str:
    """Spanish label for a status as stored, including values the enum lacks."""
    return _STATUS_LABELS.get(status, UNKNOWN_LABEL)
