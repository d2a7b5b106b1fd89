"""
Tests para el registro de mascotas
"""
import re
from fastapi import status

from pawcode.config import Settings
from pawcode.errors import ImageGenerationError
from pawcode.services.mailer import Mailer
from pawcode.services.notifications import NotificationDispatcher, get_notifier

PET_ID_RE = re.compile(r"^[0-9A-F]{12}$")

def test_register_success(client, pet_data):
    response = client.post("/api/register-pet", json=pet_data)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert PET_ID_RE.match(data["petId"])
    assert data["qrCodeDataURL"].startswith("data:image/png;base64,")
    assert "Check your email" in data["message"]

def test_register_minimal_then_scan(client):
    """Solo nombre y email bastan; el ID devuelto se puede escanear"""
    response = client.post("/api/register-pet", json={"petName": "Rex", "ownerEmail": "a@b.com"})
    assert response.status_code == status.HTTP_200_OK
    pet_id = response.json()["petId"]

    response = client.get(f"/found/{pet_id}")
    assert response.status_code == status.HTTP_200_OK
    assert "Rex" in response.text

def test_register_stores_record(client, pet_data, store):
    pet_id = client.post("/api/register-pet", json=pet_data).json()["petId"]
    pet = store._pets[pet_id]
    assert pet.pet_name == "Rex"
    assert pet.scan_count == 0
    assert pet.qr_data.endswith(f"/found/{pet_id}")

def test_register_sends_confirmation_with_qr(client, pet_data, mailer):
    pet_id = client.post("/api/register-pet", json=pet_data).json()["petId"]
    assert len(mailer.sent) == 1
    mail = mailer.sent[0]
    assert mail["to"] == "ana@example.com"
    assert "Rex's PawCode Tag is Ready" in mail["subject"]
    assert pet_id in mail["html"]
    assert "Allergic to chicken" in mail["html"]
    # el QR va como imagen inline referenciada por cid
    (cid, png), = mail["inline_images"].items()
    assert f"cid:{cid}" in mail["html"]
    assert png.startswith(b"\x89PNG")

def test_register_email_failure_keeps_record(client, pet_data, mailer):
    """Si falla el correo de confirmación el registro sigue siendo válido"""
    mailer.fail = True
    response = client.post("/api/register-pet", json=pet_data)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] is True
    assert client.get("/api/health").json()["registeredPets"] == 1

def test_register_image_failure(client, pet_data, monkeypatch):
    def broken(url):
        raise ImageGenerationError("Failed to generate QR code")
    monkeypatch.setattr("pawcode.registry.generate_qr_code", broken)

    response = client.post("/api/register-pet", json=pet_data)
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"success": False, "error": "Registration failed"}
    assert client.get("/api/health").json()["registeredPets"] == 0

def test_register_missing_email(client):
    response = client.post("/api/register-pet", json={"petName": "Rex"})
    assert response.status_code == 422
    data = response.json()
    assert data["success"] is False
    assert "error" in data

def test_register_invalid_email(client):
    response = client.post("/api/register-pet", json={"petName": "Rex", "ownerEmail": "not-an-email"})
    assert response.status_code == 422

def test_register_missing_pet_name(client):
    response = client.post("/api/register-pet", json={"petName": "", "ownerEmail": "a@b.com"})
    assert response.status_code == 422

def test_register_invalid_phone(client):
    response = client.post("/api/register-pet", json={
        "petName": "Rex",
        "ownerEmail": "a@b.com",
        "ownerPhone": "123",  # Muy corto
    })
    assert response.status_code == 422

def test_register_numeric_age(client):
    response = client.post("/api/register-pet", json={"petName": "Rex", "ownerEmail": "a@b.com", "petAge": 4})
    assert response.status_code == status.HTTP_200_OK

def test_register_newline_name_with_smtp_mailer(app, client, sms, monkeypatch):
    """Un nombre con salto de línea no rompe el correo ni el registro"""
    delivered = []
    mailer = Mailer(Settings(email_user="pawcode@example.com", email_pass="x"))
    monkeypatch.setattr(mailer, "_deliver", delivered.append)
    app.dependency_overrides[get_notifier] = lambda: NotificationDispatcher(mailer, sms)

    response = client.post("/api/register-pet", json={
        "petName": "Rex\nBcc: evil@x.com",
        "ownerEmail": "a@b.com",
    })
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["success"] is True
    assert client.get("/api/health").json()["registeredPets"] == 1

    assert len(delivered) == 1
    assert "\n" not in delivered[0]["Subject"]
    assert delivered[0]["Bcc"] is None

def test_validation_error_message_is_generic(client):
    response = client.post("/api/register-pet", json={"petName": "Rex"})
    assert response.json()["error"] == "Invalid request data"
