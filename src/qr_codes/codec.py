import base64
import io
from abc import ABC, abstractmethod
from uuid import UUID

import qrcode
from qrcode.exceptions import DataOverflowError

PAYLOAD_PREFIX = "wedding-attendee:"


def build_payload(attendee_id: UUID | str) -> str:
    """Text encoded in an attendee's QR code."""
    return f"{PAYLOAD_PREFIX}{attendee_id}"


def parse_payload(raw: str) -> str:
    """Return the attendee id from a scanned payload.

    Input without the prefix is taken to be a raw id (manual check-in).
    """
    raw = raw.strip()
    if raw.startswith(PAYLOAD_PREFIX):
        raw = raw[len(PAYLOAD_PREFIX):]
    return raw.strip()


def qr_asset_path(attendee_id: UUID | str) -> str:
    return f"qr/{attendee_id}.png"


def to_data_url(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


class QRCodec(ABC):
    @abstractmethod
    def encode(self, payload: str) -> bytes:
        """Render ``payload`` as a PNG image."""
        raise NotImplementedError


class PngQRCodec(QRCodec):
    def __init__(
        self,
        box_size: int = 10,
        border: int = 4,
        error_correction: int = qrcode.constants.ERROR_CORRECT_M,
    ) -> None:
        self.box_size = box_size
        self.border = border
        self.error_correction = error_correction

    def encode(self, payload: str) -> bytes:
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(payload)
        try:
            qr.make(fit=True)
        except DataOverflowError as e:
            raise ValueError(f"Payload too large for a QR code: {e}") from e

        img = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()
