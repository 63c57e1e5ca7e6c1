import base64
from uuid import UUID

import pytest

from src.qr_codes.codec import (
    PngQRCodec,
    build_payload,
    parse_payload,
    qr_asset_path,
    to_data_url,
)

ATTENDEE_ID = UUID("6f1c7c38-5b8e-4d59-9a43-2f4f0c1d2e3a")


def test_build_payload():
    assert build_payload(ATTENDEE_ID) == "wedding-attendee:6f1c7c38-5b8e-4d59-9a43-2f4f0c1d2e3a"


@pytest.mark.parametrize(
    "raw",
    [
        "wedding-attendee:6f1c7c38-5b8e-4d59-9a43-2f4f0c1d2e3a",
        "  wedding-attendee:6f1c7c38-5b8e-4d59-9a43-2f4f0c1d2e3a\n",
        "6f1c7c38-5b8e-4d59-9a43-2f4f0c1d2e3a",
    ],
)
def test_parse_payload(raw):
    assert parse_payload(raw) == str(ATTENDEE_ID)


def test_parse_payload_keeps_unknown_text():
    assert parse_payload("https://example.com/ticket") == "https://example.com/ticket"


def test_qr_asset_path_is_stable():
    assert qr_asset_path(ATTENDEE_ID) == qr_asset_path(str(ATTENDEE_ID))
    assert qr_asset_path(ATTENDEE_ID) == "qr/6f1c7c38-5b8e-4d59-9a43-2f4f0c1d2e3a.png"


def test_png_codec_renders_png():
    png = PngQRCodec().encode(build_payload(ATTENDEE_ID))

    assert png.startswith(b"\x89PNG\r\n\x1a\n")


def test_to_data_url():
    data_url = to_data_url(b"\x89PNG")

    assert data_url.startswith("data:image/png;base64,")
    assert base64.b64decode(data_url.split(",", 1)[1]) == b"\x89PNG"


def test_png_codec_rejects_oversized_payload():
    with pytest.raises(ValueError):
        PngQRCodec().encode("x" * 5000)
