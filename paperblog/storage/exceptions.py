class StorageError(Exception):
    """Raised when an image cannot be stored."""
