import io

import qrcode

from qrmenu.config import settings


def public_menu_url(slug: str) -> str:
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/{slug}"


def render_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    """Encode ``data`` as a black-on-white QR code PNG."""
    qr = qrcode.QRCode(version=1, box_size=box_size, border=border)
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
