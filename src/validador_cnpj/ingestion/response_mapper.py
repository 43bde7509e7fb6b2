"""
Response Mapper - ReceitaWS payload parsing.

Turns the raw body of a successful HTTP response into a QueryOutcome.

ReceitaWS payload (fields consumed):
- status / message: "ERROR" sentinel and its description
- fantasia, nome, situacao: trade name, legal name, registration status
- logradouro, numero, complemento, bairro, municipio, uf, cep: address
"""

import json
import logging
from typing import Any, Dict

from validador_cnpj.models import (
    NOT_INFORMED,
    UNKNOWN_API_ERROR,
    CompanyRecord,
    QueryOutcome,
)

logger = logging.getLogger(__name__)

ERROR_SENTINEL = "ERROR"

# CompanyRecord attribute -> (payload key, default)
FIELD_MAP = {
    "trade_name": ("fantasia", NOT_INFORMED),
    "legal_name": ("nome", NOT_INFORMED),
    "status": ("situacao", NOT_INFORMED),
    "street": ("logradouro", ""),
    "number": ("numero", ""),
    "complement": ("complemento", ""),
    "district": ("bairro", ""),
    "city": ("municipio", ""),
    "state": ("uf", ""),
    "postal_code": ("cep", ""),
}


class MalformedPayload(ValueError):
    """A consumed field holds something that cannot be read as text."""


def get_string_or_default(payload: Dict[str, Any], key: str, default: str) -> str:
    """
    Read a field as text.

    A missing key and a key holding JSON null both yield the default.
    Numbers and booleans are rendered as their JSON text ("12", "true").

    Raises:
        MalformedPayload: If the value is a JSON object or array
    """
    value = payload.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        raise MalformedPayload(f"Field '{key}' is not a scalar: {type(value).__name__}")
    return json.dumps(value)


class ResponseMapper:
    """
    Maps ReceitaWS response bodies to query outcomes.

    Stateless; a single instance can be shared by concurrent lookups.
    """

    def map(self, body: str) -> QueryOutcome:
        """
        Parse a response body.

        Args:
            body: Raw response text

        Returns:
            QueryOutcome: SUCCESS with the record, API_ERROR with the API's
                message, or MALFORMED_RESPONSE when the body is not a JSON
                object of the expected shape
        """
        try:
            payload = json.loads(body)
        except (TypeError, ValueError) as e:
            logger.warning(f"Registry returned invalid JSON: {e}")
            return QueryOutcome.malformed_response()

        if not isinstance(payload, dict):
            logger.warning(
                f"Registry returned JSON {type(payload).__name__}, expected object"
            )
            return QueryOutcome.malformed_response()

        try:
            if payload.get("status") == ERROR_SENTINEL:
                message = get_string_or_default(payload, "message", UNKNOWN_API_ERROR)
                logger.warning(f"Registry reported an error: {message}")
                return QueryOutcome.api_error(message)

            record = CompanyRecord(**{
                attribute: get_string_or_default(payload, key, default)
                for attribute, (key, default) in FIELD_MAP.items()
            })

        except MalformedPayload as e:
            logger.warning(f"Registry payload has unexpected shape: {e}")
            return QueryOutcome.malformed_response()

        logger.info(f"Mapped company record (status={record.status})")
        return QueryOutcome.success(record)
