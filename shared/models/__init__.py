from shared.models.envelope import ApiResponse
from shared.models.user import CurrentUser
from shared.models.pagination import PaginationParams, PaginatedResponse

__all__ = ["ApiResponse", "CurrentUser", "PaginationParams", "PaginatedResponse"]
