# tests/test_products.py
import asyncio
from decimal import Decimal

from bson import Decimal128, ObjectId

TEE = {"name": "Tee", "price": 19.99, "categories": [1, 2], "description": "basic", "image": "tee.png", "status": True}


def seed(collection, **fields):
    doc = {"_id": ObjectId(), "name": "Seed", "price": Decimal128("1.00"), "categories": [],
           "description": "", "image": "", "status": True}
    doc.update(fields)
    asyncio.run(collection.insert_one(doc))
    return str(doc["_id"])


def test_create_then_list(client):
    r = client.post("/CreateProduct", json=TEE)
    assert r.status_code == 200
    assert r.text == "Product created successfully."
    assert r.headers["content-type"].startswith("text/plain")

    products = client.get("/GetProducts").json()
    assert len(products) == 1
    p = products[0]
    assert p["id"] == r.headers["X-Product-Id"]
    assert p["name"] == "Tee"
    assert p["price"] == "19.99"
    assert p["categories"] == [1, 2]
    assert p["description"] == "basic"
    assert p["image"] == "tee.png"
    assert p["status"] is True


def test_create_ignores_client_id(client, collection):
    r = client.post("/CreateProduct", json={**TEE, "id": "client-chosen"})
    assert r.status_code == 200
    new_id = r.headers["X-Product-Id"]
    assert new_id != "client-chosen"
    assert ObjectId.is_valid(new_id)
    doc = asyncio.run(collection.find_one({"_id": ObjectId(new_id)}))
    assert doc is not None
    assert "id" not in doc


def test_create_generates_unique_ids(client):
    ids = {client.post("/CreateProduct", json=TEE).headers["X-Product-Id"] for _ in range(5)}
    assert len(ids) == 5
    assert len(client.get("/GetProducts").json()) == 5


def test_price_is_stored_exactly(client, collection):
    r = client.post("/CreateProduct", json={**TEE, "price": "0.10"})
    doc = asyncio.run(collection.find_one({"_id": ObjectId(r.headers["X-Product-Id"])}))
    assert doc["price"] == Decimal128(Decimal("0.10"))


def test_list_empty(client):
    r = client.get("/GetProducts")
    assert r.status_code == 200
    assert r.json() == []


def test_list_returns_every_document(client, collection):
    ids = {seed(collection, name=f"p{i}") for i in range(3)}
    products = client.get("/GetProducts").json()
    assert {p["id"] for p in products} == ids


def test_list_tolerates_sparse_documents(client, collection):
    asyncio.run(collection.insert_one({"_id": ObjectId(), "name": "Bare"}))
    [p] = client.get("/GetProducts").json()
    assert p["name"] == "Bare"
    assert p["price"] == "0"
    assert p["categories"] == []
    assert p["status"] is False


def test_api_key_query_param_is_ignored(client):
    r = client.get("/GetProducts", params={"code": "platform-key"})
    assert r.status_code == 200


def test_update_replaces_whole_document(client):
    pid = client.post("/CreateProduct", json=TEE).headers["X-Product-Id"]
    r = client.put(f"/UpdateProduct/{pid}", json={"name": "Tee2", "price": 24.5})
    assert r.status_code == 200
    assert r.text == "Product updated successfully."

    [p] = client.get("/GetProducts").json()
    assert p["id"] == pid
    assert p["name"] == "Tee2"
    assert p["price"] == "24.5"
    # fields missing from the replacement are not carried over
    assert p["categories"] == []
    assert p["description"] == ""
    assert p["image"] == ""
    assert p["status"] is False


def test_update_unknown_id_is_not_found(client, collection):
    seed(collection, name="Keep")
    r = client.put("/UpdateProduct/abc123", json={**TEE, "id": "x", "name": "Tee2"})
    assert r.status_code == 404
    assert r.text == "Product not found."
    [p] = client.get("/GetProducts").json()
    assert p["name"] == "Keep"


def test_update_absent_object_id_is_not_found(client):
    r = client.put(f"/UpdateProduct/{ObjectId()}", json=TEE)
    assert r.status_code == 404
    assert client.get("/GetProducts").json() == []


def test_update_keeps_path_id(client):
    pid = client.post("/CreateProduct", json=TEE).headers["X-Product-Id"]
    other = str(ObjectId())
    r = client.put(f"/UpdateProduct/{pid}", json={**TEE, "id": other, "name": "Renamed"})
    assert r.status_code == 200
    [p] = client.get("/GetProducts").json()
    assert p["id"] == pid
    assert p["name"] == "Renamed"


def test_update_with_identical_content_modifies_nothing(client):
    pid = client.post("/CreateProduct", json={"name": "Tee", "price": "1.00"}).headers["X-Product-Id"]
    r = client.put(f"/UpdateProduct/{pid}", json={"name": "Tee", "price": "1.00"})
    # only a modified document counts as a successful update
    assert r.status_code == 404
    assert r.text == "Product not found."
    [p] = client.get("/GetProducts").json()
    assert p["name"] == "Tee"
    assert p["price"] == "1.00"


def test_delete_removes_only_target(client, collection):
    keep = seed(collection, name="Keep")
    drop = seed(collection, name="Drop")
    r = client.delete(f"/DeleteProduct/{drop}")
    assert r.status_code == 200
    assert r.text == "Product deleted successfully."
    assert [p["id"] for p in client.get("/GetProducts").json()] == [keep]


def test_delete_twice(client, collection):
    pid = seed(collection)
    assert client.delete(f"/DeleteProduct/{pid}").status_code == 200
    r = client.delete(f"/DeleteProduct/{pid}")
    assert r.status_code == 404
    assert r.text == "Product not found."


def test_delete_unknown_id_is_noop(client, collection):
    seed(collection)
    assert client.delete("/DeleteProduct/abc123").status_code == 404
    assert client.delete(f"/DeleteProduct/{ObjectId()}").status_code == 404
    assert len(client.get("/GetProducts").json()) == 1


def test_price_keeps_every_digit(client, collection):
    body = '{"name": "Big", "price": 12345678901234567.89}'
    r = client.post("/CreateProduct", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 200
    doc = asyncio.run(collection.find_one({"_id": ObjectId(r.headers["X-Product-Id"])}))
    assert doc["price"] == Decimal128("12345678901234567.89")

    client.post("/CreateProduct", json={"name": "BigToo", "price": "12345678901234567.89"})
    prices = [p["price"] for p in client.get("/GetProducts").json()]
    assert prices == ["12345678901234567.89", "12345678901234567.89"]


def test_update_price_keeps_every_digit(client, collection):
    pid = client.post("/CreateProduct", json=TEE).headers["X-Product-Id"]
    body = '{"name": "Tee", "price": 0.30000000000000004441}'
    r = client.put(f"/UpdateProduct/{pid}", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 200
    [p] = client.get("/GetProducts").json()
    assert p["price"] == "0.30000000000000004441"
