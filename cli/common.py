"""Helpers shared by CLI commands."""

import sys
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from logger import get_logger
from session import LedgerSession

logger = get_logger()


def open_session(services) -> LedgerSession:
    """Open a session on the current workspace, exiting if there is none."""
    session = LedgerSession(services, services.config.user_id)
    workspace = session.select_initial_workspace()
    if workspace is None:
        logger.error("No workspace found.")
        logger.info("Use 'python -m cli workspaces create <name>' to create one.")
        sys.exit(1)
    return session


def parse_month(text: Optional[str]) -> Tuple[int, int]:
    """Parse a YYYY/MM argument; defaults to the current month.

    Raises:
        ValueError: If the text is not a valid month.
    """
    if not text:
        today = date.today()
        return today.year, today.month

    year, month = text.split("/")
    year, month = int(year), int(month)
    if month < 1 or month > 12:
        raise ValueError("Month must be between 1 and 12")
    return year, month


def format_amount(amount: Decimal, currency: str = "") -> str:
    text = f"{amount:,.2f}"
    return f"{currency} {text}" if currency else text
