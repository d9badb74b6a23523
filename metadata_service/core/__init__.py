from metadata_service.core.config import settings

__all__ = [
    "settings",
]
