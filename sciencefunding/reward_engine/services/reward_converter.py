"""Converts science points into a funds/reputation report."""

from typing import Optional

from ..models.report import Report


def convert(
    science_amount: float,
    subject: str,
    funds_multiplier: float,
    reputation_multiplier: float
) -> Optional[Report]:
    """
    Convert one science transmission into a Report.

    Args:
        science_amount: Science points received
        subject: Title of the experiment subject
        funds_multiplier: Funds granted per science point
        reputation_multiplier: Reputation granted per science point

    Returns:
        Report, or None when no science was received
    """
    if science_amount == 0:
        return None

    return Report(
        subject=subject,
        funds=science_amount * funds_multiplier,
        reputation=science_amount * reputation_multiplier
    )
