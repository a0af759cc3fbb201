"""API resource tests."""

from tests.conftest import make_principal


def as_principal(principal_id: int) -> dict[str, str]:
    return {"X-Principal-Id": str(principal_id)}


SUPER_ADMIN = as_principal(1)
COLLEGE_PRINCIPAL = as_principal(10)
CASHIER = as_principal(50)


# --- Authentication ---


def test_missing_identity_is_unauthorized(client) -> None:
    result = client.simulate_get("/v1/role-configs")
    assert result.status_code == 401
    assert result.json == {"error": "Unauthorized"}


def test_unknown_principal_is_unauthorized(client) -> None:
    result = client.simulate_get("/v1/principals", headers=as_principal(999))
    assert result.status_code == 401


# --- Role configs ---


def test_list_role_configs(client) -> None:
    result = client.simulate_get("/v1/role-configs", headers=COLLEGE_PRINCIPAL)
    assert result.status_code == 200
    keys = [item["role_key"] for item in result.json["items"]]
    assert "cashier" in keys
    assert "super_admin" not in keys


def test_list_role_configs_forbidden(client) -> None:
    result = client.simulate_get("/v1/role-configs", headers=CASHIER)
    assert result.status_code == 403
    assert result.json["reason"] == "permission_missing"


def test_create_custom_role(client) -> None:
    result = client.simulate_post(
        "/v1/role-configs",
        headers=SUPER_ADMIN,
        json={"role_key": "Lab Incharge", "permissions": {"attendance": {"view": True}}},
    )
    assert result.status_code == 201
    assert result.json["role_key"] == "lab_incharge"
    assert result.json["is_custom"] is True
    assert result.json["permissions"]["attendance"]["view"] is True

    duplicate = client.simulate_post("/v1/role-configs", headers=SUPER_ADMIN, json={"role_key": "lab_incharge"})
    assert duplicate.status_code == 409


def test_create_custom_role_reserved_key(client) -> None:
    result = client.simulate_post("/v1/role-configs", headers=SUPER_ADMIN, json={"role_key": "cashier"})
    assert result.status_code == 400


def test_create_custom_role_rejects_non_object_body(client) -> None:
    result = client.simulate_post("/v1/role-configs", headers=SUPER_ADMIN, json=["lab_incharge"])
    assert result.status_code == 400


def test_update_role_config_propagates(client, fake_uow) -> None:
    result = client.simulate_put(
        "/v1/role-configs/cashier",
        headers=SUPER_ADMIN,
        json={"permissions": {"fee_management": {"view": True}}},
    )
    assert result.status_code == 200
    assert result.json["updated_user_count"] == 1
    assert fake_uow.principals._by_id[50].permissions["fee_management"] == {"view": True, "write": False}


def test_update_role_config_without_propagation(client, fake_uow) -> None:
    result = client.simulate_put(
        "/v1/role-configs/cashier",
        headers=SUPER_ADMIN,
        json={"label": "Fee Clerk", "propagate_to_existing_users": False},
    )
    assert result.status_code == 200
    assert result.json["updated_user_count"] == 0
    assert result.json["config"]["label"] == "Fee Clerk"


def test_get_role_config(client) -> None:
    result = client.simulate_get("/v1/role-configs/branch_hod", headers=SUPER_ADMIN)
    assert result.status_code == 200
    assert result.json["label"] == "Branch HOD"

    missing = client.simulate_get("/v1/role-configs/night_guard", headers=SUPER_ADMIN)
    assert missing.status_code == 404


def test_delete_role_config(client, fake_uow) -> None:
    client.simulate_post("/v1/role-configs", headers=SUPER_ADMIN, json={"role_key": "lab_incharge"})
    fake_uow.principals.add(make_principal(60, "lab_incharge", college_id=1))

    in_use = client.simulate_delete("/v1/role-configs/lab_incharge", headers=SUPER_ADMIN)
    assert in_use.status_code == 409

    del fake_uow.principals._by_id[60]
    deleted = client.simulate_delete("/v1/role-configs/lab_incharge", headers=SUPER_ADMIN)
    assert deleted.status_code == 204

    built_in = client.simulate_delete("/v1/role-configs/cashier", headers=SUPER_ADMIN)
    assert built_in.status_code == 409


# --- Catalog ---


def test_catalog_roles_for_caller(client) -> None:
    result = client.simulate_get("/v1/catalog/roles", headers=as_principal(20))
    assert result.status_code == 200
    assert [r["value"] for r in result.json["items"]] == ["college_attender", "office_assistant", "cashier"]


def test_catalog_modules(client) -> None:
    result = client.simulate_get("/v1/catalog/modules", headers=CASHIER)
    assert result.status_code == 200
    assert len(result.json["items"]) == 9


# --- Principals ---


def test_create_principal(client) -> None:
    result = client.simulate_post(
        "/v1/principals",
        headers=SUPER_ADMIN,
        json={
            "name": "Ravi",
            "email": "ravi@college.test",
            "username": "ravi",
            "role": "course_principal",
            "college_id": 1,
            "course_ids": [5, 6],
        },
    )
    assert result.status_code == 201
    assert result.json["course_ids"] == [5, 6]
    assert result.json["course_id"] == 5


def test_create_principal_invalid_ids(client) -> None:
    result = client.simulate_post(
        "/v1/principals",
        headers=SUPER_ADMIN,
        json={"name": "Ravi", "email": "r@c.test", "username": "r", "role": "cashier", "college_id": "abc"},
    )
    assert result.status_code == 400


def test_create_principal_missing_required_scope(client) -> None:
    result = client.simulate_post(
        "/v1/principals",
        headers=SUPER_ADMIN,
        json={"name": "Ravi", "email": "r@c.test", "username": "r", "role": "cashier"},
    )
    assert result.status_code == 400
    assert "college" in result.json["error"]


def test_create_principal_role_not_creatable(client) -> None:
    result = client.simulate_post(
        "/v1/principals",
        headers=SUPER_ADMIN,
        json={"name": "Root", "email": "root@c.test", "username": "root", "role": "super_admin"},
    )
    assert result.status_code == 403
    assert result.json["reason"] == "role_not_creatable"


def test_list_principals_is_scoped(client) -> None:
    result = client.simulate_get("/v1/principals", headers=COLLEGE_PRINCIPAL)
    assert result.status_code == 200
    assert [p["id"] for p in result.json["items"]] == [10, 20, 30, 40, 50]


def test_update_principal_scope(client) -> None:
    result = client.simulate_put(
        "/v1/principals/50/scope",
        headers=SUPER_ADMIN,
        json={"college_id": 2},
    )
    assert result.status_code == 200
    assert result.json["college_id"] == 2


def test_deactivate_principal(client, fake_uow) -> None:
    forbidden = client.simulate_delete("/v1/principals/50", headers=COLLEGE_PRINCIPAL)
    assert forbidden.status_code == 403

    result = client.simulate_delete("/v1/principals/50", headers=SUPER_ADMIN)
    assert result.status_code == 204
    assert not fake_uow.principals._by_id[50].is_active

    gone = client.simulate_get("/v1/principals", headers=CASHIER)
    assert gone.status_code == 401


def test_get_principal(client) -> None:
    result = client.simulate_get("/v1/principals/50", headers=COLLEGE_PRINCIPAL)
    assert result.status_code == 200
    assert result.json["role"] == "cashier"

    hidden = client.simulate_get("/v1/principals/11", headers=COLLEGE_PRINCIPAL)
    assert hidden.status_code == 404


def test_patch_principal_reactivates_and_overrides(client, fake_uow) -> None:
    client.simulate_delete("/v1/principals/50", headers=SUPER_ADMIN)

    result = client.simulate_patch(
        "/v1/principals/50",
        headers=SUPER_ADMIN,
        json={"is_active": True, "permissions": {"reports": {"view": True}}},
    )
    assert result.status_code == 200
    assert result.json["is_active"] is True
    assert result.json["permissions"]["reports"] == {"view": True, "download": False}
    assert fake_uow.principals._by_id[50].is_active


def test_patch_principal_bad_body(client) -> None:
    wrong_type = client.simulate_patch("/v1/principals/50", headers=SUPER_ADMIN, json={"is_active": "yes"})
    assert wrong_type.status_code == 400

    empty = client.simulate_patch("/v1/principals/50", headers=SUPER_ADMIN, json={})
    assert empty.status_code == 400


def test_patch_principal_role_change_revalidates(client) -> None:
    result = client.simulate_patch("/v1/principals/50", headers=SUPER_ADMIN, json={"role": "branch_hod"})
    assert result.status_code == 400


# --- Scope and effective permissions ---


def test_my_scope(client) -> None:
    result = client.simulate_get("/v1/me/scope", headers=as_principal(30))
    assert result.status_code == 200
    assert result.json == {
        "unrestricted": False,
        "college_ids": [1],
        "course_ids": [5],
        "branch_ids": [],
        "all_courses": False,
        "all_branches": True,
    }

    admin = client.simulate_get("/v1/me/scope", headers=SUPER_ADMIN)
    assert admin.json["unrestricted"] is True


def test_effective_permissions_endpoint(client) -> None:
    result = client.simulate_get("/v1/role-configs/cashier/permissions", headers=COLLEGE_PRINCIPAL)
    assert result.status_code == 200
    assert result.json["permissions"]["fee_management"] == {"view": True, "write": True}

    denied = client.simulate_get("/v1/role-configs/cashier/permissions", headers=CASHIER)
    assert denied.status_code == 403


def test_catalog_roles_lists_custom_roles_for_top_level(client) -> None:
    client.simulate_post("/v1/role-configs", headers=SUPER_ADMIN, json={"role_key": "Lab Incharge"})
    result = client.simulate_get("/v1/catalog/roles", headers=SUPER_ADMIN)
    assert result.json["items"][-1]["value"] == "lab_incharge"
