from src.qr_codes.codec import (
    PAYLOAD_PREFIX,
    QRCodec,
    PngQRCodec,
    build_payload,
    parse_payload,
    qr_asset_path,
    to_data_url,
)


def get_qr_codec() -> QRCodec:
    return PngQRCodec()


__all__ = [
    "PAYLOAD_PREFIX",
    "QRCodec",
    "PngQRCodec",
    "build_payload",
    "get_qr_codec",
    "parse_payload",
    "qr_asset_path",
    "to_data_url",
]
