"""
Unit tests for the platform fee tiers.
"""
from decimal import Decimal

from campus_gigs.services.fee_calculator import compute_fees


def test_first_gig_recruiter_pays_nothing():
    """Test a recruiter with no completed gigs is on the first-gig tier."""
    fees = compute_fees(Decimal("10000"), 0)

    assert fees.is_first_gig is True
    assert fees.is_power_user is False
    assert fees.recruiter_fee_percent == Decimal("0")
    assert fees.recruiter_fee_amount == Decimal("0.00")
    assert fees.student_fee_percent == Decimal("5")
    assert fees.student_fee_amount == Decimal("500.00")
    assert fees.net_to_student == Decimal("9500.00")


def test_one_completed_gig_still_first_gig():
    """Test the first-gig tier includes a count of exactly one."""
    fees = compute_fees(1000, 1)
    assert fees.is_first_gig is True
    assert fees.recruiter_fee_amount == Decimal("0.00")


def test_regular_tier():
    """Test counts between 2 and 4 pay the standard rates."""
    for count in (2, 3, 4):
        fees = compute_fees(Decimal("10000"), count)
        assert fees.is_first_gig is False
        assert fees.is_power_user is False
        assert fees.recruiter_fee_amount == Decimal("1000.00")
        assert fees.student_fee_amount == Decimal("500.00")
        assert fees.net_to_student == Decimal("9500.00")


def test_power_user_tier():
    """Test five or more completed gigs get the reduced rates."""
    for count in (5, 6, 10):
        fees = compute_fees(Decimal("10000"), count)

        assert fees.is_first_gig is False
        assert fees.is_power_user is True
        assert fees.recruiter_fee_percent == Decimal("8")
        assert fees.recruiter_fee_amount == Decimal("800.00")
        assert fees.student_fee_percent == Decimal("3")
        assert fees.student_fee_amount == Decimal("300.00")
        assert fees.net_to_student == Decimal("9700.00")


def test_recruiter_fee_does_not_reduce_student_net():
    """Test net to student is gross minus the student fee only."""
    fees = compute_fees(Decimal("2000"), 3)
    assert fees.net_to_student == Decimal("2000") - fees.student_fee_amount


def test_rounding_half_up():
    """Test amounts are rounded half-up to two decimal places."""
    # 5% of 10.10 = 0.505
    fees = compute_fees("10.10", 0)
    assert fees.student_fee_amount == Decimal("0.51")
    assert fees.net_to_student == Decimal("9.59")


def test_zero_amount():
    """Test a gig without a payment amount yields zero fees."""
    fees = compute_fees(None, 7)
    assert fees.recruiter_fee_amount == Decimal("0.00")
    assert fees.student_fee_amount == Decimal("0.00")
    assert fees.net_to_student == Decimal("0.00")

