import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clinic_dashboard.dependencies import get_api_client, get_clock, get_config
from clinic_dashboard.main import app

from conftest import NOW, appointment_payload, patient_payload, session_payload


@pytest_asyncio.fixture
async def client(fake_api, api_client, config):
    """
    Provide an async test client wired to the in-memory clinic API.
    """
    fake_api.collections["Pacientes"] = [
        patient_payload(tags=["ansiedad"]),
        patient_payload(id="p2", nombre="Luis", apellidos="Pérez", email="luis@x.es"),
    ]
    fake_api.collections["Cita"] = [
        appointment_payload(id="c1", inicio="2025-01-16T10:00:00Z", fin="2025-01-16T11:00:00Z"),
        appointment_payload(
            id="c2",
            paciente_id="p2",
            inicio="2025-01-15T12:00:00Z",
            fin="2025-01-15T13:00:00Z",
            estado=1,
            modo=1,
        ),
        appointment_payload(id="c3", inicio="2025-01-17T10:00:00Z", estado=2),
    ]
    fake_api.collections["Sesion"] = [
        session_payload(archivos=[{"nombre": "test.pdf", "url": "https://f.test/test.pdf"}]),
        session_payload(id="s2", paciente_id="p2"),
    ]

    app.dependency_overrides[get_api_client] = lambda: api_client
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_clock] = lambda: NOW

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_dashboard(client):
    response = await client.get("/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert [c["value"] for c in data["stats"]] == ["12", "3", "40", "2"]
    assert [u["id"] for u in data["upcoming"]] == ["c2", "c1"]
    assert data["upcoming"][0]["patient_name"] == "Luis Pérez"
    assert data["upcoming"][0]["when"] == "15 de enero de 2025, 13:00"
    assert data["upcoming"][0]["mode_label"] == "online"
    assert data["upcoming_error"] is None


@pytest.mark.asyncio
async def test_dashboard_survives_appointments_outage(client, fake_api):
    fake_api.failures[("GET", "/Cita")] = 500

    response = await client.get("/dashboard")

    assert response.status_code == 200
    assert response.json()["upcoming"] == []
    assert response.json()["upcoming_error"].startswith("Error al cargar las citas")


@pytest.mark.asyncio
async def test_list_patients_with_search(client):
    response = await client.get("/patients", params={"search": "pérez"})

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["patients"][0]["full_name"] == "Luis Pérez"

    all_patients = (await client.get("/patients")).json()["patients"]
    assert all_patients[0]["tags"] == ["ansiedad"]
    assert all_patients[0]["birth_date"] == "1990-05-20"


@pytest.mark.asyncio
async def test_list_patients_upstream_failure_is_502(client, fake_api):
    fake_api.failures[("GET", "/Pacientes")] = 500

    response = await client.get("/patients")

    assert response.status_code == 502
    assert response.json()["detail"].startswith("No se pudieron cargar los pacientes.")


@pytest.mark.asyncio
async def test_create_patient(client, fake_api):
    response = await client.post(
        "/patients",
        json={
            "first_name": "Marta",
            "last_name": "Ruiz",
            "email": "marta@example.com",
            "phone": "600123456",
            "emergency_contact": "600654321",
            "birth_date": "1985-03-02",
            "tags": ["pareja"],
        },
    )

    assert response.status_code == 201
    assert response.json()["total"] == 3
    (_, _, body), = fake_api.calls("POST", "/Pacientes")
    assert body["fechaNacimiento"] == "1985-03-02T00:00:00Z"


@pytest.mark.asyncio
async def test_create_patient_validation_error_is_422(client, fake_api):
    response = await client.post(
        "/patients",
        json={
            "first_name": "Marta",
            "last_name": "Ruiz",
            "email": "not-an-email",
            "phone": "600123456",
            "emergency_contact": "600654321",
        },
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "El email no es válido"
    assert fake_api.calls("POST") == []


@pytest.mark.asyncio
async def test_update_unknown_patient_is_404(client):
    response = await client.put("/patients/ghost", json={})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_patient(client, fake_api):
    response = await client.put(
        "/patients/p1",
        json={
            "first_name": "Ana",
            "last_name": "García López",
            "email": "ana@example.com",
            "phone": "600111222",
            "emergency_contact": "600999888",
            "birth_date": "1990-05-20",
            "tags": [],
        },
    )

    assert response.status_code == 200
    names = [p["full_name"] for p in response.json()["patients"]]
    assert "Ana García López" in names


@pytest.mark.asyncio
async def test_delete_requires_confirmation(client, fake_api):
    response = await client.delete("/patients/p1")

    assert response.status_code == 409
    assert fake_api.calls("DELETE") == []

    response = await client.delete("/patients/p1", params={"confirm": "true"})

    assert response.status_code == 200
    assert [p["id"] for p in response.json()["patients"]] == ["p2"]


@pytest.mark.asyncio
async def test_failed_delete_is_502(client, fake_api):
    fake_api.failures[("DELETE", "/Sesion/s1")] = 500

    response = await client.delete("/sessions/s1", params={"confirm": "true"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Error al eliminar la sesión"


@pytest.mark.asyncio
async def test_agenda_grouped_by_day(client):
    response = await client.get("/agenda")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 3
    assert [d["heading"] for d in data["days"]] == [
        "Miércoles, 15 de enero de 2025",
        "Jueves, 16 de enero de 2025",
        "Viernes, 17 de enero de 2025",
    ]
    first = data["days"][0]["appointments"][0]
    assert first["time_range"] == "13:00 - 14:00"
    assert first["status_label"] == "Confirmada"
    assert {p["name"] for p in data["patients"]} == {"Ana García", "Luis Pérez"}


@pytest.mark.asyncio
async def test_agenda_filters(client):
    response = await client.get(
        "/agenda",
        params={"patient_id": "p1", "status": "0", "date_from": "2025-01-16"},
    )

    days = response.json()["days"]
    assert [a["id"] for d in days for a in d["appointments"]] == ["c1"]

    response = await client.get("/agenda", params={"date_to": "2025-01-15"})
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_agenda_rejects_unknown_status(client):
    response = await client.get("/agenda", params={"status": "maybe"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_create_appointment(client, fake_api):
    payload = {
        "patient_id": "p2",
        "day": "2025-01-20",
        "start_time": "10:00",
        "end_time": "10:10",
        "mode": 1,
        "location": "https://meet.test/abc",
    }

    response = await client.post("/agenda/appointments", json=payload)
    assert response.status_code == 422
    assert response.json()["detail"] == "La cita debe durar al menos 15 minutos"

    payload["end_time"] = "10:16"
    response = await client.post("/agenda/appointments", json=payload)

    assert response.status_code == 201
    assert response.json()["total"] == 4
    (_, _, body), = fake_api.calls("POST", "/Cita")
    assert body["fechaInicio"] == "2025-01-20T09:00:00Z"
    assert body["fechaFin"] == "2025-01-20T09:16:00Z"
    assert body["modo"] == 1


@pytest.mark.asyncio
async def test_create_appointment_upstream_failure_is_502(client, fake_api):
    fake_api.failures[("POST", "/Cita")] = 500

    response = await client.post(
        "/agenda/appointments",
        json={"patient_id": "p1", "day": "2025-01-20", "location": "Consulta 1"},
    )

    assert response.status_code == 502
    assert response.json()["detail"] == "Error al crear la cita"


@pytest.mark.asyncio
async def test_update_appointment_status(client, fake_api):
    response = await client.put(
        "/agenda/appointments/c1",
        json={
            "patient_id": "p1",
            "day": "2025-01-16",
            "start_time": "11:00",
            "end_time": "12:00",
            "status": 3,
            "location": "Consulta 1",
        },
    )

    assert response.status_code == 200
    assert fake_api.collections["Cita"][0]["estado"] == 3
    assert fake_api.collections["Cita"][0]["fechaInicio"] == "2025-01-16T10:00:00Z"


@pytest.mark.asyncio
async def test_cancel_appointment(client, fake_api):
    response = await client.delete("/agenda/appointments/c3", params={"confirm": "true"})

    assert response.status_code == 200
    assert response.json()["total"] == 2
    assert [c["id"] for c in fake_api.collections["Cita"]] == ["c1", "c2"]


@pytest.mark.asyncio
async def test_list_sessions(client):
    response = await client.get("/sessions", params={"search": "ana"})

    data = response.json()
    assert data["total"] == 1
    assert data["sessions"][0]["patient_name"] == "Ana García"
    assert data["sessions"][0]["attachment_count"] == 1


@pytest.mark.asyncio
async def test_create_session_with_attachments(client, fake_api):
    response = await client.post(
        "/sessions",
        json={
            "patient_id": "p2",
            "subjective": "Mejoría del sueño",
            "attachments": ["https://files.test/docs/registro.pdf", "/shared/dibujo.png"],
        },
    )

    assert response.status_code == 201
    (_, _, body), = fake_api.calls("POST", "/Sesion")
    assert body["citaId"] is None
    assert body["archivosJson"] == (
        '[{"nombre": "registro.pdf", "url": "https://files.test/docs/registro.pdf"}, '
        '{"nombre": "dibujo.png", "url": "/shared/dibujo.png"}]'
    )


@pytest.mark.asyncio
async def test_create_session_rejects_bad_attachment(client, fake_api):
    response = await client.post(
        "/sessions",
        json={"patient_id": "p2", "attachments": ["ftp://files.test/a.pdf"]},
    )

    assert response.status_code == 422
    assert fake_api.calls("POST") == []


@pytest.mark.asyncio
async def test_create_session_requires_patient(client):
    response = await client.post("/sessions", json={"subjective": "x"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Por favor selecciona un paciente"


@pytest.mark.asyncio
async def test_session_detail(client):
    response = await client.get("/sessions/s1")

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Sesión de Ana García"
    assert [s["key"] for s in data["sections"]] == ["S", "O", "A", "P"]
    assert data["attachments"] == [{"nombre": "test.pdf", "url": "https://f.test/test.pdf"}]

    assert (await client.get("/sessions/ghost")).status_code == 404


@pytest.mark.asyncio
async def test_update_session_soap_fields(client, fake_api):
    response = await client.put(
        "/sessions/s1",
        json={
            "subjective": "Refiere menos ansiedad",
            "objective": "",
            "assessment": "Mejoría",
            "plan": "",
        },
    )

    assert response.status_code == 200
    sections = {s["key"]: s["text"] for s in response.json()["sections"]}
    assert sections == {
        "S": "Refiere menos ansiedad",
        "O": "Sin información",
        "A": "Mejoría",
        "P": "Sin información",
    }
    stored = fake_api.collections["Sesion"][0]
    assert stored["analasis"] == "Mejoría"
    assert stored["archivosJson"] is not None


@pytest.mark.asyncio
async def test_agenda_labels_unknown_status(client, fake_api):
    fake_api.collections["Cita"].append(
        appointment_payload(
            id="c4",
            inicio="2025-01-18T10:00:00Z",
            fin="2025-01-18T11:00:00Z",
            estado=7,
            modo=5,
        )
    )

    response = await client.get("/agenda")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 4
    row = data["days"][-1]["appointments"][0]
    assert row["id"] == "c4"
    assert row["status_label"] == "Desconocido"
    assert row["mode_label"] == "Desconocido"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path", ["/patients/ghost", "/agenda/appointments/ghost", "/sessions/ghost"]
)
@pytest.mark.parametrize("params", [{}, {"confirm": "true"}])
async def test_delete_unknown_id_is_404(client, fake_api, path, params):
    response = await client.delete(path, params=params)

    assert response.status_code == 404
    assert fake_api.calls("DELETE") == []
