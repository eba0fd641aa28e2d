# transport/client.py
"""
Cliente HTTP de los servicios de parseo y canonicalización.
"""

import json
import logging
from typing import Any, Optional, Protocol, runtime_checkable

import requests

from .errors import TransportError, TransportErrors

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class CanonicalService(Protocol):
    """Contrato mínimo que necesita el orquestador."""

    def send_for_canonicalization(self, wire_message: str) -> str:
        ...


@runtime_checkable
class ParserService(Protocol):
    """Devuelve la respuesta del emisor parseada como [{dataElementId, value}]."""

    def send_to_parser(self, wire_message: str) -> str:
        ...


class CanonicalClient:
    """Envía mensajes ISO en texto plano por POST y devuelve el cuerpo de la respuesta."""

    def __init__(
        self,
        canonical_url: str,
        parser_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[Any] = None
    ):
        self.canonical_url = canonical_url
        self.parser_url = parser_url
        self.timeout = timeout
        self._http = session or requests

    @classmethod
    def from_settings(cls, settings) -> "CanonicalClient":
        return cls(
            canonical_url=settings.CANONICAL_URL,
            parser_url=settings.PARSER_URL,
            timeout=settings.REQUEST_TIMEOUT_SECONDS
        )

    def send_for_canonicalization(self, wire_message: str) -> str:
        """
        Convierte el mensaje a su forma canónica.

        Args:
            wire_message: Mensaje ISO 8583 serializado

        Returns:
            Texto JSON canónico

        Raises:
            TransportError: Respuesta no 2xx o fallo de conexión
        """
        return self._post(self.canonical_url, wire_message)

    def send_to_parser(self, wire_message: str) -> str:
        """Envía el mensaje al servicio de parseo."""
        if not self.parser_url:
            raise TransportError(code="CONNECTION_FAILED", message="Parser URL is not configured")
        return self._post(self.parser_url, wire_message)

    def _post(self, url: str, body: str) -> str:
        logger.info(f"POST {url} ({len(body)} chars)")
        try:
            response = self._http.post(
                url,
                data=body.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Error de conexión con {url}: {e}")
            raise TransportErrors.connection_failed(url, str(e))

        if 200 <= response.status_code < 300:
            return response.text

        if response.status_code == 400:
            error = TransportErrors.bad_request(self._extract_error_message(response.text))
        else:
            error = TransportErrors.http_error(response.status_code, response.text)

        logger.error(error.message)
        raise error

    @staticmethod
    def _extract_error_message(body: str) -> str:
        """Usa las claves message/error del JSON; si no, el cuerpo tal cual."""
        try:
            payload = json.loads(body)
        except ValueError:
            return body

        if isinstance(payload, dict):
            for key in ("message", "error"):
                if key in payload:
                    return str(payload[key])
        return body
