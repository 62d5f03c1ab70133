"""
Unit tests for the plan registry.
"""
from decimal import Decimal

import pytest

from campus_gigs.core.errors import ConflictError, NotFoundError, ValidationError
from campus_gigs.db.models.plan import Plan
from campus_gigs.services import plan_registry


def test_load_plans_reads_storage(db, plans):
    """Test every stored plan is returned with its terms."""
    loaded = plan_registry.load_plans(db)

    assert set(loaded) == {"free", "basic", "pro"}
    assert loaded["basic"].price == Decimal("5000")
    assert loaded["basic"].max_posts == 5
    assert loaded["pro"].unbounded is True


def test_load_plans_synthesizes_free(db):
    """Test the free plan is always present, even with an empty table."""
    loaded = plan_registry.load_plans(db)

    assert "free" in loaded
    assert loaded["free"].price == Decimal("0")


def test_edits_visible_without_restart(db, plans):
    """Test a plan update is seen by the next lookup."""
    plan_registry.update_plan(db, plans["basic"].id, "Basic", Decimal("6000"), 7)

    terms = plan_registry.get_plan_terms(db, "basic")
    assert terms.price == Decimal("6000")
    assert terms.max_posts == 7


def test_get_plan_terms_unknown(db, plans):
    assert plan_registry.get_plan_terms(db, "enterprise") is None


def test_create_plan(db, plans):
    """Test creating a new plan."""
    plan = plan_registry.create_plan(db, "campus", "Campus", Decimal("2500"), 20)

    assert plan.id is not None
    assert plan_registry.get_plan_terms(db, "campus").max_posts == 20


def test_create_plan_duplicate_key(db, plans):
    """Test creating a plan with an existing key is a conflict."""
    with pytest.raises(ConflictError):
        plan_registry.create_plan(db, "basic", "Basic again", Decimal("1"), 1)


def test_create_plan_negative_price(db):
    with pytest.raises(ValidationError):
        plan_registry.create_plan(db, "odd", "Odd", Decimal("-1"), 1)


def test_update_missing_plan(db):
    with pytest.raises(NotFoundError):
        plan_registry.update_plan(db, 999, "Nope", Decimal("0"), None)


def test_delete_plan(db, plans):
    """Test deleting a plan removes it from the registry."""
    plan_id = plans["pro"].id
    plan_registry.delete_plan(db, plan_id)

    assert "pro" not in plan_registry.load_plans(db)
    with pytest.raises(NotFoundError):
        plan_registry.delete_plan(db, plan_id)


def test_seed_default_plans_only_when_empty(db):
    """Test default tiers are inserted once into an empty table."""
    assert plan_registry.seed_default_plans(db) == len(plan_registry.DEFAULT_PLANS)
    assert plan_registry.seed_default_plans(db) == 0
    assert db.query(Plan).count() == len(plan_registry.DEFAULT_PLANS)
