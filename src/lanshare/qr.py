from __future__ import annotations

from io import BytesIO

import qrcode
from PIL import Image

QR_SIZE = 256


def encode_png(data: str, size: int = QR_SIZE) -> bytes:
    """Закодировать ``data`` в QR-код и вернуть PNG размером ``size``×``size``."""
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").get_image()
    img = img.convert("L").resize((size, size), Image.NEAREST)
    buffered = BytesIO()
    img.save(buffered, format="PNG")
    return buffered.getvalue()
