from peoplenrich.services.schemas.persons import (
    PersonRead,
    PersonCreate,
    PersonUpdate,
)
from peoplenrich.services.schemas.envelope import (
    APIResponse,
    APIError,
)
__all__ = [
    "PersonRead",
    "PersonCreate",
    "PersonUpdate",
    "APIResponse",
    "APIError",
]
