import inspect
from functools import wraps

from app.core.errors import AppError, ConflictError, ServerError, ValidationError
from app.db.repository import CastError, DuplicateKeyStorageError, StorageValidationError
from app.utiles.logger import get_logger

logger = get_logger(__name__)


def reclassify(exc: Exception, entity: str = "Resource", id_field: str = "_id") -> AppError:
    """Map a storage failure onto the client-facing error taxonomy."""
    if isinstance(exc, AppError):
        return exc
    if isinstance(exc, CastError) and exc.kind == "ObjectId":
        field = id_field if exc.path == "_id" else exc.path
        return ValidationError.single(field, exc.value, f"Invalid {entity} ID format")
    if isinstance(exc, StorageValidationError) and exc.violations:
        # Only the first schema violation is surfaced
        first = exc.violations[0]
        return ValidationError.single(first.field, first.value, first.message)
    if isinstance(exc, DuplicateKeyStorageError):
        return ConflictError(entity, exc.field, exc.value)
    return ServerError()


def handle_exceptions(func=None, *, entity: str = "Resource", id_field: str = "_id"):
    """
    Wrap an endpoint so every failure leaves it as an AppError.

    Usable bare (``@handle_exceptions``) or with the entity name used in
    reclassified messages (``@handle_exceptions(entity="Supplier", id_field="supplier_Id")``).
    """
    if func is None:
        return lambda f: handle_exceptions(f, entity=entity, id_field=id_field)

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                logger.debug(f"Calling function: {func.__name__}")
                result = await func(*args, **kwargs)
                logger.debug(f"Function {func.__name__} completed successfully")
                return result
            except AppError as ae:
                logger.warning(f"{type(ae).__name__} in {func.__name__}: {ae.error}")
                raise
            except (CastError, StorageValidationError, DuplicateKeyStorageError) as se:
                mapped = reclassify(se, entity, id_field)
                logger.warning(f"{type(se).__name__} in {func.__name__} -> {type(mapped).__name__}: {se}")
                raise mapped from se
            except Exception as e:
                logger.exception(f"Exception in function: {func.__name__} - {str(e)}")
                raise ServerError() from e
        return wrapper
    else:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                logger.debug(f"Calling function: {func.__name__}")
                result = func(*args, **kwargs)
                logger.debug(f"Function {func.__name__} completed successfully")
                return result
            except AppError as ae:
                logger.warning(f"{type(ae).__name__} in {func.__name__}: {ae.error}")
                raise
            except (CastError, StorageValidationError, DuplicateKeyStorageError) as se:
                mapped = reclassify(se, entity, id_field)
                logger.warning(f"{type(se).__name__} in {func.__name__} -> {type(mapped).__name__}: {se}")
                raise mapped from se
            except Exception as e:
                logger.exception(f"Exception in function: {func.__name__} - {str(e)}")
                raise ServerError() from e
        return wrapper
