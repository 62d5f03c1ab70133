"""
Endpoint tests for admin plan and subscription management.
"""
from campus_gigs.db.models.subscription import Subscription


def test_plans_require_admin(client, plans, recruiter_headers):
    response = client.get("/admin/plans", headers=recruiter_headers)

    assert response.status_code == 403
    assert response.json() == {"message": "You do not have permission to perform this action"}


def test_list_plans(client, plans, admin_headers):
    response = client.get("/admin/plans", headers=admin_headers)

    assert response.status_code == 200
    keys = [p["key"] for p in response.json()]
    assert keys == ["free", "basic", "pro"]


def test_create_plan(client, admin_headers):
    body = {"key": "campus", "label": "Campus", "price": 2500, "max_posts": 20}

    response = client.post("/admin/plans", json=body, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["key"] == "campus"
    assert data["price"] == 2500.0


def test_create_plan_duplicate(client, plans, admin_headers):
    body = {"key": "basic", "label": "Basic", "price": 1, "max_posts": 1}
    response = client.post("/admin/plans", json=body, headers=admin_headers)
    assert response.status_code == 409


def test_create_plan_invalid_key(client, admin_headers):
    body = {"key": "Not A Key", "label": "Bad", "price": 1}
    response = client.post("/admin/plans", json=body, headers=admin_headers)
    assert response.status_code == 400


def test_update_plan_changes_quota(client, plans, recruiter, recruiter_headers, admin_headers, make_subscription):
    """Test a plan edit takes effect on the next status read."""
    make_subscription(recruiter, plan="basic")

    response = client.put(
        f"/admin/plans/{plans['basic'].id}",
        json={"label": "Basic", "price": 5000, "max_posts": 8},
        headers=admin_headers,
    )
    assert response.status_code == 200

    status = client.get("/subscriptions/status", headers=recruiter_headers).json()
    assert status["maxPosts"] == 8


def test_delete_plan(client, plans, admin_headers):
    response = client.delete(f"/admin/plans/{plans['pro'].id}", headers=admin_headers)
    assert response.status_code == 200

    response = client.get("/admin/plans", headers=admin_headers)
    assert "pro" not in [p["key"] for p in response.json()]


def test_list_subscriptions(client, recruiter, admin_headers, make_subscription):
    make_subscription(recruiter, plan="basic")

    response = client.get("/admin/subscriptions", headers=admin_headers)

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["recruiterName"] == "Rita Recruiter"


def test_cancel_and_reactivate(client, db, recruiter, admin_headers, make_subscription):
    sub = make_subscription(recruiter, plan="basic")
    sub_id = sub.id

    response = client.post(f"/admin/subscriptions/{sub_id}/cancel", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    db.expire_all()
    assert db.get(Subscription, sub_id).status == "canceled"

    client.post(f"/admin/subscriptions/{sub_id}/reactivate", headers=admin_headers)
    db.expire_all()
    assert db.get(Subscription, sub_id).status == "active"


def test_cancel_unknown_subscription(client, admin_headers):
    response = client.post("/admin/subscriptions/999/cancel", headers=admin_headers)

    assert response.status_code == 404
    assert response.json() == {"message": "Subscription not found"}


def test_cancel_requires_admin(client, recruiter, recruiter_headers, make_subscription):
    sub = make_subscription(recruiter)
    response = client.post(f"/admin/subscriptions/{sub.id}/cancel", headers=recruiter_headers)
    assert response.status_code == 403
