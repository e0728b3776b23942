# services/qr_code_service.py
"""
QR code images for attendee codes.
The image encodes the plain code string, so any QR reader returns exactly
what the check-in endpoint expects.
"""

import io
import logging

import qrcode

logger = logging.getLogger('qr_code_service')


class QRCodeService:
    """Renders attendee codes as PNG QR images."""

    @staticmethod
    def build(code, box_size=10, border=4):
        """Return a fitted qrcode.QRCode holding code."""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_H,
            box_size=box_size,
            border=border,
        )
        qr.add_data(code)
        qr.make(fit=True)
        return qr

    @staticmethod
    def render_png(code, box_size=10, border=4):
        """
        Render code as a PNG image.

        Args:
            code: Attendee code
            box_size: Pixels per module
            border: Quiet zone in modules

        Returns:
            bytes: PNG data
        """
        qr = QRCodeService.build(code, box_size=box_size, border=border)
        image = qr.make_image(fill_color="black", back_color="white")

        output = io.BytesIO()
        image.save(output, format='PNG')
        logger.debug(f"Rendered QR code for {code}")
        return output.getvalue()
