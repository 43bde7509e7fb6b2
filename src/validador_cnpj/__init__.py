"""
CNPJ Validator (validador-cnpj)

Validates Brazilian company identifiers (CNPJ) with the Federal Revenue
check-digit algorithm and, for valid identifiers, fetches the company's
registration record from the ReceitaWS public API.
"""

__version__ = "1.0.0"
