# pawcode/services/qr.py
import base64
import io
import logging
from dataclasses import dataclass

import qrcode
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage

from ..errors import ImageGenerationError

logger = logging.getLogger(__name__)

# Parámetros fijos de la placa
QR_WIDTH = 300
QR_MARGIN = 2
QR_DARK = "#2d5a3d"
QR_LIGHT = "#ffffff"

@dataclass(frozen=True)
class QRCode:
    qr_data: str    # URL codificada
    png: bytes      # para grabado/impresión y adjuntos de correo
    data_url: str   # para mostrar inline

def build_scan_url(base_url: str, pet_id: str) -> str:
    return f"{base_url.rstrip('/')}/found/{pet_id}"

def generate_qr_code(url: str) -> QRCode:
    """
    Genera el QR de la URL de escaneo.
    Lanza ImageGenerationError si el codificador no puede representar la entrada.
    """
    try:
        qr = qrcode.QRCode(border=QR_MARGIN, error_correction=qrcode.constants.ERROR_CORRECT_M)
        qr.add_data(url)
        qr.make(fit=True)
        # Ajusta el tamaño de módulo para acercarse al ancho fijo
        qr.box_size = max(1, QR_WIDTH // (qr.modules_count + 2 * QR_MARGIN))
        img = qr.make_image(image_factory=PilImage, fill_color=QR_DARK, back_color=QR_LIGHT)
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
    except (DataOverflowError, ValueError, OSError) as e:
        logger.error(f"QR generation failed for {url!r}: {e}", exc_info=True)
        raise ImageGenerationError("Failed to generate QR code") from e

    png = buffer.getvalue()
    data_url = "data:image/png;base64," + base64.b64encode(png).decode("ascii")
    return QRCode(qr_data=url, png=png, data_url=data_url)
