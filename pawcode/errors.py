# pawcode/errors.py
"""
Errores de dominio de PawCode.

Los routers traducen estas excepciones a respuestas HTTP; los fallos de
servicios externos (correo, SMS) se capturan donde se usan y solo se registran.
"""


class PawCodeError(Exception):
    """Base de todos los errores de la aplicación."""


class PetNotFound(PawCodeError):
    def __init__(self, pet_id: str):
        super().__init__(f"Pet not found: {pet_id}")
        self.pet_id = pet_id


class ExternalServiceError(PawCodeError):
    """Fallo en un proveedor externo (SMTP, Twilio, generador de QR)."""


class ImageGenerationError(ExternalServiceError):
    pass
