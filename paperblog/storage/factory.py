from paperblog.config.settings import Settings
from paperblog.storage.base import BaseImageStorage
from paperblog.storage.local_adapter import LocalImageStorage
from paperblog.storage.s3_adapter import S3ImageStorage


class ImageStorageFactory:
    """Creates the configured image storage backend."""

    BACKENDS = ("s3", "local")

    @classmethod
    def create(cls, settings: Settings) -> BaseImageStorage:
        backend = settings.storage_backend.lower()
        if backend == "s3":
            return S3ImageStorage(
                bucket_name=settings.s3_bucket_name,
                region=settings.aws_region,
                key_prefix=settings.s3_key_prefix,
                public_base_url=settings.s3_public_base_url,
                max_workers=settings.upload_max_workers,
            )
        if backend == "local":
            return LocalImageStorage(
                directory=settings.local_storage_dir,
                base_url=settings.local_storage_base_url,
                max_workers=settings.upload_max_workers,
            )
        raise ValueError(f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}")
