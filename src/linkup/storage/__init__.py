"""Object storage for post media."""

from linkup.storage.base import ObjectStore
from linkup.storage.s3 import S3ObjectStore

__all__ = ["ObjectStore", "S3ObjectStore"]
