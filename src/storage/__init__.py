from src.config.settings import settings
from src.storage.base import ObjectStorage, StorageError
from src.storage.s3_storage import S3ObjectStorage


def get_object_storage() -> ObjectStorage:
    return S3ObjectStorage(config=settings)


__all__ = [
    "ObjectStorage",
    "S3ObjectStorage",
    "StorageError",
    "get_object_storage",
]
