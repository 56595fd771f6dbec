"""
Translation of storage outcomes into HTTP errors
"""

from fastapi import HTTPException, status

from sportsbar.storage.errors import ConflictError, MissingReferenceError, StorageError


def not_found(entity: str, key: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{entity} {key} not found",
    )


def storage_error(exc: StorageError) -> HTTPException:
    """Map a storage exception onto the status code the admin panel expects"""
    if isinstance(exc, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, MissingReferenceError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
