"""
Platform fee tiers.

Fees depend only on how many gigs have been completed so far:

- first gig (count <= 1): recruiter pays nothing, student pays 5%
- regular (2..4): recruiter 10%, student 5%
- power user (count >= 5): recruiter 8%, student 3%

The recruiter fee is billed separately, so it never reduces the student's net.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")

FIRST_GIG_MAX_COMPLETED = 1
POWER_USER_MIN_COMPLETED = 5

RECRUITER_FEE_FIRST_GIG = Decimal("0")
RECRUITER_FEE_STANDARD = Decimal("10")
RECRUITER_FEE_POWER_USER = Decimal("8")

STUDENT_FEE_STANDARD = Decimal("5")
STUDENT_FEE_POWER_USER = Decimal("3")


@dataclass(frozen=True)
class FeeBreakdown:
    completed_count: int
    is_first_gig: bool
    is_power_user: bool
    recruiter_fee_percent: Decimal
    student_fee_percent: Decimal
    recruiter_fee_amount: Decimal
    student_fee_amount: Decimal
    net_to_student: Decimal


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_fees(gross_amount, completed_count: int) -> FeeBreakdown:
    """
    Compute the fee split for a gig payment.

    Args:
        gross_amount: Agreed payment for the gig (Decimal, int, float or numeric str)
        completed_count: Completed gigs counted for the fee tier

    Returns:
        FeeBreakdown with amounts rounded half-up to 2 decimal places
    """
    gross = Decimal(str(gross_amount or 0))
    count = int(completed_count or 0)

    is_first_gig = count <= FIRST_GIG_MAX_COMPLETED
    is_power_user = count >= POWER_USER_MIN_COMPLETED

    if is_first_gig:
        recruiter_percent = RECRUITER_FEE_FIRST_GIG
    elif is_power_user:
        recruiter_percent = RECRUITER_FEE_POWER_USER
    else:
        recruiter_percent = RECRUITER_FEE_STANDARD
    student_percent = STUDENT_FEE_POWER_USER if is_power_user else STUDENT_FEE_STANDARD

    recruiter_amount = _money(gross * recruiter_percent / 100)
    student_amount = _money(gross * student_percent / 100)

    return FeeBreakdown(
        completed_count=count,
        is_first_gig=is_first_gig,
        is_power_user=is_power_user,
        recruiter_fee_percent=recruiter_percent,
        student_fee_percent=student_percent,
        recruiter_fee_amount=recruiter_amount,
        student_fee_amount=student_amount,
        net_to_student=_money(gross - student_amount),
    )
