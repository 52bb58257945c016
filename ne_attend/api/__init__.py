from .client import BackendError, BulkUploadClient

__all__ = [
    "BackendError",
    "BulkUploadClient",
]
