# pawcode/pages.py
# Páginas HTML que ve quien escanea el QR
from html import escape
from typing import Optional

from .schemas.pet import PetRecord
from .utils import digits_only

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html>
  <head><meta charset="UTF-8"><title>Pet Not Found - PawCode</title></head>
  <body style="font-family: Arial, sans-serif; text-align: center; padding: 50px;">
    <h1>❌ Pet Not Found</h1>
    <p>This QR code doesn't match any registered pets.</p>
    <p>Please contact PawCode support if you believe this is an error.</p>
  </body>
</html>"""

FOUND_STYLE = """
    body { font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
           background: linear-gradient(135deg, #e8f5f3 0%, #f0f8ff 100%);
           margin: 0; padding: 20px; min-height: 100vh; }
    .container { max-width: 500px; margin: 0 auto; background: white; border-radius: 20px;
                 padding: 30px; box-shadow: 0 10px 30px rgba(0,0,0,0.1); text-align: center; }
    .pet-header { background: linear-gradient(135deg, #4a90e2 0%, #50c878 100%); color: white;
                  padding: 20px; border-radius: 15px; margin-bottom: 20px; }
    .pet-name { font-size: 2rem; margin: 0; }
    .pet-info { text-align: left; background: #f8fafb; padding: 20px; border-radius: 15px; margin: 20px 0; }
    .info-row { display: flex; justify-content: space-between; margin-bottom: 10px;
                padding-bottom: 10px; border-bottom: 1px solid #e2e8f0; }
    .info-row:last-child { border-bottom: none; margin-bottom: 0; }
    .label { font-weight: 600; color: #2d5a3d; }
    .value { color: #64748b; }
    .contact-section { background: #e8f5f3; padding: 20px; border-radius: 15px; margin: 20px 0; }
    .contact-button { display: inline-block; background: #50c878; color: white; padding: 12px 24px;
                      text-decoration: none; border-radius: 25px; margin: 5px; font-weight: 600; }
    .notification-badge { background: #50c878; color: white; padding: 10px 20px;
                          border-radius: 10px; margin: 20px 0; font-weight: 600; }
"""

def _row(label: str, value: Optional[str]) -> str:
    return (
        '<div class="info-row">'
        f'<span class="label">{label}:</span>'
        f'<span class="value">{escape(value or "")}</span>'
        "</div>"
    )

def render_found_page(pet: PetRecord) -> str:
    name = escape(pet.pet_name)
    rows = [
        _row("Pet Name", pet.pet_name),
        _row("Breed", pet.pet_breed),
        _row("Age", pet.pet_age),
        _row("Color", pet.pet_color),
    ]
    if pet.medical_info:
        rows.append(_row("Medical Info", pet.medical_info))
    if pet.special_instructions:
        rows.append(_row("Instructions", pet.special_instructions))

    contact = [f"<p><strong>Owner:</strong> {escape(pet.owner_name or '')}</p>"]
    if pet.owner_phone:
        phone = escape(pet.owner_phone)
        contact.append(f'<a href="tel:{phone}" class="contact-button">📞 Call {phone}</a>')
    contact.append(f'<a href="mailto:{escape(pet.owner_email)}" class="contact-button">✉️ Email Owner</a>')
    if pet.owner_phone:
        contact.append(
            f'<a href="https://wa.me/{digits_only(pet.owner_phone)}" class="contact-button">💬 WhatsApp</a>'
        )
    if pet.owner_address:
        contact.append(f"<p><strong>Address:</strong> {escape(pet.owner_address)}</p>")
    if pet.emergency_contact:
        contact.append(f"<p><strong>Emergency Contact:</strong> {escape(pet.emergency_contact)}</p>")

    info_rows = "".join(rows)
    contact_block = "".join(contact)
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Found Pet: {name} - PawCode</title>
  <style>{FOUND_STYLE}</style>
</head>
<body>
  <div class="container">
    <div class="pet-header">
      <h1 class="pet-name">🐕 {name}</h1>
      <p>You found me! Thank you! 🎉</p>
    </div>
    <div class="notification-badge">✅ Owner has been notified automatically!</div>
    <div class="pet-info">
      {info_rows}
    </div>
    <div class="contact-section">
      <h3>📞 Contact Owner</h3>
      {contact_block}
    </div>
    <p style="color: #64748b; font-size: 14px; margin-top: 30px;">
      Scan #{pet.scan_count} • Powered by PawCode
    </p>
  </div>
</body>
</html>"""
