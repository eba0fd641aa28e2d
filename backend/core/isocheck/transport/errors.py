# transport/errors.py
"""
Errores del transporte hacia los servicios de parseo y canonicalización.
"""

from typing import Optional


class TransportError(Exception):
    """Fallo del colaborador remoto; aborta el procesamiento de la fila."""

    def __init__(self, code: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code

    def to_dict(self):
        return {
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code
        }


class TransportErrors:
    """Factory de errores de transporte."""

    @staticmethod
    def bad_request(message: str) -> TransportError:
        return TransportError(
            code="BAD_REQUEST",
            message=f"Error: {message}",
            status_code=400
        )

    @staticmethod
    def http_error(status_code: int, body: str) -> TransportError:
        return TransportError(
            code="HTTP_ERROR",
            message=f"HTTP {status_code}: {body}",
            status_code=status_code
        )

    @staticmethod
    def connection_failed(url: str, details: str) -> TransportError:
        return TransportError(
            code="CONNECTION_FAILED",
            message=f"Could not reach {url}: {details}"
        )
