"""
Checksum Validator - CNPJ check-digit algorithm.

A CNPJ has 12 base digits followed by 2 check digits. Each check digit is
11 minus the remainder of a weighted sum modulo 11, with results above 9
collapsing to 0. The second sum covers the first check digit as well.
"""

import logging
from typing import List

from validador_cnpj.models import CNPJ, ValidationOutcome, ValidationStatus

logger = logging.getLogger(__name__)

CNPJ_LENGTH = 14

FIRST_DIGIT_WEIGHTS = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
SECOND_DIGIT_WEIGHTS = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]


def compute_check_digit(digits: List[int], weights: List[int]) -> int:
    """
    Compute one check digit.

    Args:
        digits: Preceding digits (same length as weights)
        weights: Weight vector

    Returns:
        Check digit in 0-9
    """
    total = sum(digit * weight for digit, weight in zip(digits, weights))
    check = 11 - (total % 11)
    return 0 if check > 9 else check


def validate_checksum(digits: str) -> ValidationOutcome:
    """
    Validate a normalized CNPJ.

    Checks:
    - Not empty
    - Exactly 14 digits
    - Not a repeated-digit sequence (00000000000000 ... 99999999999999)
    - Both check digits match

    Args:
        digits: Output of normalize()

    Returns:
        ValidationOutcome: VALID carries the CNPJ; other statuses carry nothing
    """
    if not digits:
        return ValidationOutcome(ValidationStatus.EMPTY)

    if len(digits) != CNPJ_LENGTH:
        return ValidationOutcome(ValidationStatus.WRONG_LENGTH)

    if not (digits.isascii() and digits.isdigit()):
        logger.debug(f"Rejected non-digit input of length {CNPJ_LENGTH}")
        return ValidationOutcome(ValidationStatus.CHECKSUM_FAILED)

    if digits == digits[0] * CNPJ_LENGTH:
        return ValidationOutcome(ValidationStatus.CHECKSUM_FAILED)

    values = [int(c) for c in digits]

    first = compute_check_digit(values[:12], FIRST_DIGIT_WEIGHTS)
    if values[12] != first:
        return ValidationOutcome(ValidationStatus.CHECKSUM_FAILED)

    second = compute_check_digit(values[:13], SECOND_DIGIT_WEIGHTS)
    if values[13] != second:
        return ValidationOutcome(ValidationStatus.CHECKSUM_FAILED)

    return ValidationOutcome(ValidationStatus.VALID, cnpj=CNPJ(digits))


def is_valid_cnpj(digits: str) -> bool:
    """Shortcut for validate_checksum(digits).is_valid."""
    return validate_checksum(digits).is_valid
