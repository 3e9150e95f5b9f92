"""
Traducción de errores del juego a respuestas HTTP
"""

from fastapi import HTTPException, status

from blockguess.core.exceptions import (
    DuplicateSubmissionError,
    GameError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    NotStartedError,
    StorageFailureError,
    WindowClosedError,
)

# El orden importa: las subclases van antes que sus bases
ERROR_STATUS = [
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (NotStartedError, status.HTTP_403_FORBIDDEN),
    (WindowClosedError, status.HTTP_403_FORBIDDEN),
    (DuplicateSubmissionError, status.HTTP_409_CONFLICT),
    (StorageFailureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def to_http_exception(error: GameError) -> HTTPException:
    """Convierte un GameError en HTTPException con el status correspondiente"""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(error)
    )
