from datetime import datetime
from typing import Optional


def format_brl(value: float) -> str:
    """Format an amount the Brazilian way: 1234.5 -> '1234,50'."""
    return f"{value:.2f}".replace(".", ",")


def format_datetime_br(value: Optional[datetime]) -> str:
    """dd/mm/yyyy HH:MM, or an empty string."""
    return value.strftime("%d/%m/%Y %H:%M") if value else ""
