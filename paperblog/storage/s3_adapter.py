import uuid

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from paperblog.logging.logger import Log
from paperblog.storage.base import BaseImageStorage, extension_for
from paperblog.storage.exceptions import StorageError


class S3ImageStorage(BaseImageStorage):
    """Stores images in an S3 bucket under ``<prefix>/<uuid4>.<ext>``."""

    def __init__(
        self,
        *,
        bucket_name: str,
        region: str,
        key_prefix: str = "blog-images",
        public_base_url: str = "",
        max_workers: int = 4,
        client: object | None = None,
    ) -> None:
        super().__init__(max_workers=max_workers)
        self._bucket_name = bucket_name
        self._region = region
        self._key_prefix = key_prefix.strip("/")
        self._public_base_url = public_base_url.rstrip("/")
        self._client = client or boto3.client("s3", region_name=region)

    def upload(self, data: bytes, mime_type: str, alt_text: str) -> str:
        key = self._build_key(mime_type)
        try:
            self._client.put_object(  # type: ignore[attr-defined]
                Bucket=self._bucket_name,
                Key=key,
                Body=data,
                ContentType=mime_type,
                Metadata={"alt-text": alt_text.encode("ascii", "ignore").decode("ascii")},
            )
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"S3 upload of {key} failed: {exc}") from exc
        Log.debug(f"Uploaded {len(data)} bytes to s3://{self._bucket_name}/{key}")
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        return f"https://{self._bucket_name}.s3.{self._region}.amazonaws.com/{key}"

    def _build_key(self, mime_type: str) -> str:
        name = f"{uuid.uuid4()}.{extension_for(mime_type)}"
        return f"{self._key_prefix}/{name}" if self._key_prefix else name
