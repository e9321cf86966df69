# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Input validation shared by the ledger components.

Every helper raises InvalidInputError so a malformed call aborts before any
state is touched.
"""

from __future__ import annotations

from savings_ledger.errors import InvalidInputError
from savings_ledger.types import CATEGORY_CODES, Category


def validate_principal(principal: object) -> str:
    """Return ``principal`` if it is a non-empty string."""
    if not isinstance(principal, str) or not principal:
        raise InvalidInputError(f"principal must be a non-empty string, got {principal!r}")
    return principal


def validate_amount(amount: object, name: str = "amount") -> int:
    """Return ``amount`` if it is a strictly positive integer."""
    # bool is an int subclass; True must not pass as 1.
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidInputError(f"{name} must be an integer, got {amount!r}")
    if amount <= 0:
        raise InvalidInputError(f"{name} must be positive, got {amount}")
    return amount


def validate_category(category: object) -> Category:
    """Map a category code (1..7) onto Category."""
    if isinstance(category, bool) or not isinstance(category, int):
        raise InvalidInputError(f"category must be an integer code, got {category!r}")
    if category not in CATEGORY_CODES:
        raise InvalidInputError(
            f"category must be one of {sorted(CATEGORY_CODES)}, got {category}"
        )
    return Category(category)


def validate_text(value: object, name: str, max_length: int) -> str:
    """Return ``value`` if it is a non-empty string of at most ``max_length``."""
    if not isinstance(value, str) or not value:
        raise InvalidInputError(f"{name} must be a non-empty string")
    if len(value) > max_length:
        raise InvalidInputError(
            f"{name} must be at most {max_length} characters, got {len(value)}"
        )
    return value
