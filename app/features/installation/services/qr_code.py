"""
QR code rendering for the scan URL shown next to the installation.
"""
import io
from pathlib import Path

import qrcode
from qrcode.image.svg import SvgPathImage


def build_qr(data: str, border: int = 1) -> qrcode.QRCode:
    qr = qrcode.QRCode(error_correction=qrcode.constants.ERROR_CORRECT_M, border=border)
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def render_ascii(data: str) -> str:
    """Terminal rendering, two module rows per text line."""
    buffer = io.StringIO()
    # inverted so the code reads dark-on-light on dark terminals
    build_qr(data).print_ascii(out=buffer, invert=True)
    return buffer.getvalue()


def save_svg(data: str, path: Path) -> Path:
    image = build_qr(data, border=4).make_image(image_factory=SvgPathImage)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        image.save(f)
    return path
