from typing import Optional
from fastapi import status


class InventoryServiceError(Exception):
    """Base class for errors surfaced to API callers as {"error": message}."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(InventoryServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class Unauthorized(InventoryServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token"


class NotFound(InventoryServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class NoConsumptionData(NotFound):
    """Terminal business condition: the product has neither recipe lines nor ingredient links."""
    default_message = "No recipe or ingredients found for this product"


class LookupFailed(InventoryServiceError):
    """A required row could not be read from the store."""
    default_message = "Lookup failed"


class InternalError(InventoryServiceError):
    pass
