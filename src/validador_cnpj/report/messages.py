"""
Result Messages - user-facing lines for every validation and lookup outcome.

Lines are pt-BR text, emitted in this order:
validation warnings -> validity confirmation -> query status ->
company detail block -> final status line.
"""

from typing import List

from validador_cnpj.models import (
    CNPJ,
    CompanyRecord,
    QueryOutcome,
    QueryStatus,
    ValidationOutcome,
    ValidationStatus,
)

STATE_REGISTRATION_UNAVAILABLE = "Não disponível na ReceitaWS (API pública)"
RETRY_LATER = "Por favor, tente novamente mais tarde ou verifique o CNPJ."


def validation_lines(outcome: ValidationOutcome, typed: str) -> List[str]:
    """
    Lines for the local validation step.

    Args:
        outcome: Checksum validation result
        typed: CNPJ as the user typed it (whitespace-trimmed)
    """
    if outcome.status is ValidationStatus.EMPTY:
        return ["Por favor, digite um CNPJ."]
    if outcome.status is ValidationStatus.WRONG_LENGTH:
        return ["CNPJ deve ter 14 dígitos."]
    if outcome.status is ValidationStatus.CHECKSUM_FAILED:
        return [
            f"CNPJ {typed} é matematicamente inválido.",
            "Por favor, verifique os dígitos e tente novamente.",
        ]
    return [f"CNPJ {typed} é matematicamente válido."]


def querying_line(cnpj: CNPJ, registry_name: str = "ReceitaWS") -> str:
    return f"Consultando {registry_name} para {cnpj.digits}..."


def query_failure_lines(outcome: QueryOutcome) -> List[str]:
    """Lines for every non-SUCCESS lookup outcome."""
    if outcome.status is QueryStatus.API_ERROR:
        return [f"Erro na consulta da API: {outcome.message}", RETRY_LATER]
    if outcome.status is QueryStatus.TIMEOUT:
        return [
            "Erro de conexão: Tempo limite excedido ao consultar a API. "
            "Verifique sua internet."
        ]
    if outcome.status is QueryStatus.MALFORMED_RESPONSE:
        return ["Erro ao processar a resposta da API (JSON inválido)."]
    if outcome.status is QueryStatus.TRANSPORT_ERROR:
        if outcome.http_status is not None:
            return [f"Requisição falhou: {outcome.message}"]
        return [f"Erro ao consultar a API: {outcome.message}"]
    raise ValueError(f"Not a failure outcome: {outcome.status}")


def unexpected_error_line(error: BaseException) -> str:
    return f"Ocorreu um erro inesperado: {error}"


def company_lines(
    cnpj: CNPJ,
    record: CompanyRecord,
    registry_name: str = "ReceitaWS"
) -> List[str]:
    """Company detail block followed by the final status line."""
    address = f"{record.street}, {record.number}"
    if record.complement:
        address += f" - {record.complement}"

    return [
        "",
        f"--- Dados da Empresa ({registry_name}) ---",
        f"CNPJ: {cnpj.digits}",
        f"Razão Social: {record.legal_name}",
        f"Nome Fantasia: {record.trade_name}",
        f"Inscrição Estadual: {STATE_REGISTRATION_UNAVAILABLE}",
        f"Status na Receita: {record.status}",
        f"Endereço: {address}",
        f"Bairro: {record.district}",
        f"Cidade/UF: {record.city}/{record.state}",
        f"CEP: {record.postal_code}",
        "------------------------",
        final_status_line(record),
    ]


def final_status_line(record: CompanyRecord) -> str:
    if record.is_active:
        return "Status Final: CNPJ está **ATIVO** na Receita Federal."
    return (
        f"Status Final: CNPJ está **{record.status}** na Receita Federal. "
        f"Pode ser inválido para operações."
    )
