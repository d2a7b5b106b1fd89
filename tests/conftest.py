"""
Configuración de pytest para tests
"""
import pytest
from fastapi.testclient import TestClient

from pawcode.db import MemoryRegistry, get_db
from pawcode.errors import ExternalServiceError
from pawcode.services.notifications import NotificationDispatcher, get_notifier


class FakeMailer:
    """Sustituye al SMTP: guarda los correos o falla a demanda."""

    def __init__(self):
        self.sent = []
        self.fail = False

    async def send(self, to, subject, text, html=None, inline_images=None):
        if self.fail:
            raise ExternalServiceError("SMTP down")
        self.sent.append({
            "to": to,
            "subject": subject,
            "text": text,
            "html": html,
            "inline_images": inline_images or {},
        })


class FakeSms:
    def __init__(self, enabled=True):
        self.enabled = enabled
        self.sent = []
        self.fail = False

    async def send(self, to, body):
        if self.fail:
            raise ExternalServiceError("Twilio down")
        self.sent.append({"to": to, "body": body})
        return "SM123"


# Deshabilitar rate limiting en la app antes de importarla
@pytest.fixture(scope="session", autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    from pawcode.main import app
    app.state.limiter = None

@pytest.fixture
def store():
    return MemoryRegistry()

@pytest.fixture
def mailer():
    return FakeMailer()

@pytest.fixture
def sms():
    return FakeSms()

@pytest.fixture
def notifier(mailer, sms):
    return NotificationDispatcher(mailer, sms)

@pytest.fixture
def app(store, notifier):
    from pawcode.main import app
    app.state.limiter = None
    app.dependency_overrides[get_db] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield app
    app.dependency_overrides.clear()

@pytest.fixture
def client(app):
    """Fixture para cliente de test de FastAPI"""
    return TestClient(app)

@pytest.fixture
def pet_data():
    """Datos de registro de prueba"""
    return {
        "petName": "Rex",
        "petBreed": "Labrador",
        "petAge": "3",
        "petColor": "Black",
        "ownerName": "Ana",
        "ownerPhone": "+34600123456",
        "ownerEmail": "ana@example.com",
        "ownerAddress": "Calle Test 123",
        "emergencyContact": "Luis +34600999888",
        "medicalInfo": "Allergic to chicken",
        "specialInstructions": "Shy with strangers",
    }

@pytest.fixture
def registered_pet(client, pet_data):
    """Registra una mascota y devuelve su petId"""
    response = client.post("/api/register-pet", json=pet_data)
    assert response.status_code == 200
    return response.json()["petId"]
