"""
Value types shared by the validation, lookup and reporting layers.

Outcomes are closed enumerations returned by value: every caller handles
each status explicitly instead of catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

NOT_INFORMED = "Não informado"
UNKNOWN_API_ERROR = "Erro desconhecido da API."


def format_cnpj(digits: str) -> str:
    """
    Format a CNPJ as XX.XXX.XXX/XXXX-XX.

    Args:
        digits: CNPJ with digits only

    Returns:
        Formatted CNPJ, or empty string if the input is not 14 digits long
    """
    if len(digits) != 14:
        return ""
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


@dataclass(frozen=True)
class CNPJ:
    """
    A checksum-valid CNPJ: 14 ASCII digits, not all identical.

    Only validation.checksum_validator builds these; holding one means the
    check digits have already been verified.
    """

    digits: str

    @property
    def formatted(self) -> str:
        return format_cnpj(self.digits)

    def __str__(self) -> str:
        return self.digits


class ValidationStatus(Enum):
    """Result of the local check-digit validation."""
    EMPTY = "empty"
    WRONG_LENGTH = "wrong_length"
    CHECKSUM_FAILED = "checksum_failed"
    VALID = "valid"


@dataclass(frozen=True)
class ValidationOutcome:
    """Validation status plus the CNPJ when (and only when) it is VALID."""

    status: ValidationStatus
    cnpj: Optional[CNPJ] = None

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID


@dataclass(frozen=True)
class CompanyRecord:
    """
    Company registration data as returned by the registry.

    Attributes:
        trade_name: Nome fantasia
        legal_name: Razão social
        status: Situação cadastral (e.g. ATIVA, BAIXADA, NULA)
        street, number, complement, district: Address lines
        city, state, postal_code: Município, UF and CEP
    """

    trade_name: str = NOT_INFORMED
    legal_name: str = NOT_INFORMED
    status: str = NOT_INFORMED
    street: str = ""
    number: str = ""
    complement: str = ""
    district: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""

    @property
    def is_active(self) -> bool:
        return self.status.upper() == "ATIVA"


class QueryStatus(Enum):
    """Result of a registry lookup."""
    SUCCESS = "success"
    API_ERROR = "api_error"
    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class QueryOutcome:
    """
    Registry lookup outcome.

    record is set for SUCCESS; message for API_ERROR and TRANSPORT_ERROR.
    http_status is set when the registry answered with a non-2xx status.
    """

    status: QueryStatus
    record: Optional[CompanyRecord] = None
    message: Optional[str] = None
    http_status: Optional[int] = None

    @classmethod
    def success(cls, record: CompanyRecord) -> "QueryOutcome":
        return cls(QueryStatus.SUCCESS, record=record)

    @classmethod
    def api_error(cls, message: str) -> "QueryOutcome":
        return cls(QueryStatus.API_ERROR, message=message)

    @classmethod
    def timeout(cls) -> "QueryOutcome":
        return cls(QueryStatus.TIMEOUT)

    @classmethod
    def transport_error(
        cls,
        message: str,
        http_status: Optional[int] = None
    ) -> "QueryOutcome":
        return cls(QueryStatus.TRANSPORT_ERROR, message=message, http_status=http_status)

    @classmethod
    def malformed_response(cls) -> "QueryOutcome":
        return cls(QueryStatus.MALFORMED_RESPONSE)

    @property
    def is_success(self) -> bool:
        return self.status is QueryStatus.SUCCESS
