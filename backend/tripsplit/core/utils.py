"""
Utility functions for the application.
"""
from typing import Any, Dict
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def quantize_amount(value: Decimal) -> Decimal:
    """Round a money value to 2 decimals, half-up. Only used for display."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
