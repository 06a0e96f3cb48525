from .errors import (  # noqa
    BadRequest,
    Conflict,
    InternalServerError,
    NotFound,
    StoreHubError,
    StoreHubInitError,
    Unauthorized,
    UnprocessableEntity,
)
from .models import (  # noqa
    AbstractRepository,
    AbstractUnitOfWork,
    Entity,
    ReposMap,
)
