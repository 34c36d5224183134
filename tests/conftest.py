import json
import os
from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio

os.environ.setdefault("DD_TRACE_ENABLED", "false")

from clinic_dashboard.config import ApiConfig, AppConfig, ScheduleConfig  # noqa: E402
from clinic_dashboard.infrastructure import HttpApiClient  # noqa: E402
from clinic_dashboard.repositories import (  # noqa: E402
    AppointmentRepository,
    DashboardRepository,
    PatientRepository,
    SessionRepository,
)

API_ROOT = "https://clinic.test/api"

# Wednesday 15 January 2025, 10:00 in Madrid
NOW = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)


def patient_payload(
    id="p1",
    nombre="Ana",
    apellidos="García",
    email="ana@example.com",
    telefono="600111222",
    tags=None,
    **extra,
):
    return {
        "id": id,
        "nombre": nombre,
        "apellidos": apellidos,
        "email": email,
        "telefono": telefono,
        "contactoEmergencia": "600999888",
        "tagsJson": json.dumps(tags or []),
        "fechaNacimiento": "1990-05-20T00:00:00Z",
        **extra,
    }


def appointment_payload(
    id="c1",
    paciente_id="p1",
    inicio="2025-01-15T10:00:00Z",
    fin="2025-01-15T11:00:00Z",
    estado=0,
    modo=0,
    **extra,
):
    return {
        "id": id,
        "pacienteId": paciente_id,
        "fechaInicio": inicio,
        "fechaFin": fin,
        "modo": modo,
        "estado": estado,
        "ubicacionLink": "Consulta 1",
        "notas": None,
        **extra,
    }


def session_payload(id="s1", paciente_id="p1", archivos=None, **extra):
    return {
        "id": id,
        "pacienteId": paciente_id,
        "citaId": None,
        "soapSubj": "Refiere ansiedad",
        "observaciones": "Inquieta",
        "analasis": "Ansiedad generalizada",
        "planAccion": "Respiración diafragmática",
        "archivosJson": json.dumps(archivos) if archivos is not None else None,
        **extra,
    }


class FakeClinicApi:
    """
    In-memory stand-in for the clinic REST API, served through httpx.MockTransport.

    `failures` maps (method, path) to a status code, or to an exception the
    transport raises instead of answering.
    """

    def __init__(self):
        self.collections = {"Pacientes": [], "Cita": [], "Sesion": []}
        self.summary = {
            "totalPacientes": 12,
            "citasHoy": 3,
            "totalSesiones": 40,
            "proximaCita": 2,
        }
        self.requests = []
        self.failures = {}
        self._next_id = 100

    def calls(self, method, path=None):
        return [
            r for r in self.requests if r[0] == method and (path is None or r[1] == path)
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, path, body))

        failure = self.failures.get((request.method, path))
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            return httpx.Response(failure, text="Internal Server Error")

        if path == "/dashboard/summary":
            if self.summary is None:
                return httpx.Response(204)
            return httpx.Response(200, json=self.summary)

        name, _, item_id = path.strip("/").partition("/")
        collection = self.collections[name]
        if not item_id:
            if request.method == "GET":
                return httpx.Response(200, json=collection)
            self._next_id += 1
            created = {"id": str(self._next_id), **body}
            collection.append(created)
            return httpx.Response(201, json=created)

        index = next(
            (i for i, item in enumerate(collection) if item["id"] == item_id), None
        )
        if index is None:
            return httpx.Response(404, text="Not Found")
        if request.method == "PUT":
            collection[index] = {**collection[index], **body}
        elif request.method == "DELETE":
            del collection[index]
        return httpx.Response(204)


@pytest.fixture
def fake_api():
    return FakeClinicApi()


@pytest_asyncio.fixture
async def api_client(fake_api):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_api.handler)) as client:
        yield HttpApiClient(client, API_ROOT)


@pytest.fixture
def config():
    return AppConfig(
        api=ApiConfig(base_url="https://clinic.test"),
        schedule=ScheduleConfig(timezone="Europe/Madrid"),
    )


@pytest.fixture
def patients_repo(api_client):
    return PatientRepository(api_client)


@pytest.fixture
def appointments_repo(api_client):
    return AppointmentRepository(api_client)


@pytest.fixture
def sessions_repo(api_client):
    return SessionRepository(api_client)


@pytest.fixture
def dashboard_repo(api_client):
    return DashboardRepository(api_client)
