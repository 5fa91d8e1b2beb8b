"""Backend election listing service client."""

from .client import ElectionApiClient, ElectionApiError


__all__ = ["ElectionApiClient", "ElectionApiError"]
