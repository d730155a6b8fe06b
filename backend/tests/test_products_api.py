# tests/test_products_api.py
from tests.conftest import auth_headers


def create(client, token, payload):
    return client.post("/api/products", json=payload, headers=auth_headers(token))


def test_admin_lifecycle_scenario(client, user_token, admin_token, shirt):
    # Non-admin cannot create
    assert create(client, user_token, shirt).status_code == 403

    r = create(client, admin_token, shirt)
    assert r.status_code == 201
    product = r.json()
    assert product["title"] == "Shirt"
    assert product["categories"] == []
    assert "isAdmin" not in product

    # Same title again
    r = create(client, admin_token, {**shirt, "desc": "Red shirt", "img": "url2"})
    assert r.status_code == 409

    # Reads allowed for non-admin
    r = client.get(f"/api/products/find/{product['id']}", headers=auth_headers(user_token))
    assert r.status_code == 200
    assert r.json()["desc"] == "Blue shirt"

    assert client.delete(f"/api/products/{product['id']}", headers=auth_headers(user_token)).status_code == 403
    r = client.delete(f"/api/products/{product['id']}", headers=auth_headers(admin_token))
    assert r.status_code == 200
    assert "message" in r.json()

    r = client.get(f"/api/products/find/{product['id']}", headers=auth_headers(user_token))
    assert r.status_code == 404


def test_desc_and_img_are_unique(client, admin_token, shirt):
    assert create(client, admin_token, shirt).status_code == 201
    r = create(client, admin_token, {"title": "Other", "desc": "Blue shirt", "img": "url9"})
    assert r.status_code == 409
    assert "desc" in r.json()["detail"]
    r = create(client, admin_token, {"title": "Other", "desc": "Other desc", "img": "url1"})
    assert r.status_code == 409
    assert "img" in r.json()["detail"]


def test_create_validation(client, admin_token):
    assert create(client, admin_token, {"title": "No desc", "img": "u"}).status_code == 422
    assert create(client, admin_token, {"title": "", "desc": "d", "img": "u"}).status_code == 422
    r = create(client, admin_token, {"title": "T", "desc": "d", "img": "u", "price": -1})
    assert r.status_code == 422


def test_create_with_optional_fields(client, admin_token):
    payload = {
        "title": "Jeans", "desc": "Slim jeans", "img": "jeans.png",
        "price": 49.5, "categories": ["men", "denim"], "size": "32", "color": "indigo",
    }
    r = create(client, admin_token, payload)
    assert r.status_code == 201
    body = r.json()
    for key, value in payload.items():
        assert body[key] == value


def test_list_products_in_creation_order(client, user_token, admin_token):
    for i in range(3):
        assert create(client, admin_token, {"title": f"P{i}", "desc": f"D{i}", "img": f"I{i}"}).status_code == 201
    r = client.get("/api/products", headers=auth_headers(user_token))
    assert r.status_code == 200
    assert [p["title"] for p in r.json()] == ["P0", "P1", "P2"]


def test_partial_update(client, admin_token, shirt):
    pid = create(client, admin_token, {**shirt, "price": 10}).json()["id"]
    r = client.put(f"/api/products/{pid}", json={"price": 12.5, "color": "blue"}, headers=auth_headers(admin_token))
    assert r.status_code == 200
    body = r.json()
    assert body["price"] == 12.5
    assert body["color"] == "blue"
    assert body["title"] == "Shirt"
    assert body["desc"] == "Blue shirt"

    # Re-sending its own title is not a conflict
    r = client.put(f"/api/products/{pid}", json={"title": "Shirt"}, headers=auth_headers(admin_token))
    assert r.status_code == 200


def test_update_rejects_null_required_fields(client, admin_token, shirt):
    pid = create(client, admin_token, shirt).json()["id"]
    r = client.put(f"/api/products/{pid}", json={"title": None}, headers=auth_headers(admin_token))
    assert r.status_code == 422


def test_update_conflict_leaves_record_untouched(client, admin_token, shirt):
    create(client, admin_token, shirt)
    pid = create(client, admin_token, {"title": "Hat", "desc": "Red hat", "img": "url2"}).json()["id"]
    r = client.put(f"/api/products/{pid}", json={"title": "Shirt", "price": 3}, headers=auth_headers(admin_token))
    assert r.status_code == 409
    body = client.get(f"/api/products/find/{pid}", headers=auth_headers(admin_token)).json()
    assert body["title"] == "Hat"
    assert body["price"] is None


def test_update_missing_product(client, admin_token):
    r = client.put("/api/products/999", json={"title": "Ghost"}, headers=auth_headers(admin_token))
    assert r.status_code == 404
    r = client.get("/api/products", headers=auth_headers(admin_token))
    assert r.json() == []


def test_delete_missing_product(client, admin_token):
    assert client.delete("/api/products/999", headers=auth_headers(admin_token)).status_code == 404


def test_non_admin_rejected_for_all_writes(client, user_token, admin_token, shirt):
    pid = create(client, admin_token, shirt).json()["id"]
    headers = auth_headers(user_token)
    assert client.post("/api/products", json={**shirt, "title": "x"}, headers=headers).status_code == 403
    assert client.put(f"/api/products/{pid}", json={"price": 1}, headers=headers).status_code == 403
    assert client.delete(f"/api/products/{pid}", headers=headers).status_code == 403
    # Gate runs before the body is looked at
    assert client.post("/api/products", json={}, headers=headers).status_code == 403


def test_reads_require_token(client, admin_token, shirt):
    pid = create(client, admin_token, shirt).json()["id"]
    assert client.get(f"/api/products/find/{pid}").status_code == 401
    assert client.post("/api/products", json=shirt).status_code == 401


def test_error_bodies_carry_message(client, admin_token):
    r = client.get("/api/products/find/999", headers=auth_headers(admin_token))
    assert r.status_code == 404
    assert r.json() == {"detail": "Product not found", "message": "Product not found"}


def test_price_must_be_finite(client, admin_token):
    headers = {**auth_headers(admin_token), "Content-Type": "application/json"}
    for literal in ("Infinity", "NaN"):
        body = '{"title": "T", "desc": "d", "img": "u", "price": %s}' % literal
        r = client.post("/api/products", content=body, headers=headers)
        assert r.status_code == 422

    pid = create(client, admin_token, {"title": "T", "desc": "d", "img": "u"}).json()["id"]
    r = client.put(f"/api/products/{pid}", content='{"price": Infinity}', headers=headers)
    assert r.status_code == 422


def test_long_description_is_stored_and_kept_unique(client, admin_token):
    long_desc = "Hand-woven cotton. " * 500  # well past a btree entry limit
    r = create(client, admin_token, {"title": "Rug", "desc": long_desc, "img": "rug.png"})
    assert r.status_code == 201
    assert r.json()["desc"] == long_desc

    r = create(client, admin_token, {"title": "Rug 2", "desc": long_desc, "img": "rug2.png"})
    assert r.status_code == 409
    assert "desc" in r.json()["detail"]


def test_description_length_bound(client, admin_token):
    from app.schemas.product import DESC_MAX_LENGTH

    ok = create(client, admin_token, {"title": "A", "desc": "x" * DESC_MAX_LENGTH, "img": "a.png"})
    assert ok.status_code == 201
    too_long = create(client, admin_token, {"title": "B", "desc": "y" * (DESC_MAX_LENGTH + 1), "img": "b.png"})
    assert too_long.status_code == 422
    assert create(client, admin_token, {"title": "C", "desc": "c", "img": "i" * 2049}).status_code == 422
