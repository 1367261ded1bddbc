from tests.conftest import item_body


def test_items_require_session(client):
	assert client.get("/api/items").status_code == 401
	assert client.post("/api/items", json=item_body()).status_code == 401
	assert client.get("/api/items/1").status_code == 401
	assert client.put("/api/items/1", json=item_body()).status_code == 401
	assert client.delete("/api/items/1").status_code == 401
	assert client.get("/api/items/stats").status_code == 401


def test_malformed_cookie_is_unauthorized(client):
	client.cookies.set("auth_user_id", "not-a-number")
	res = client.get("/api/items")

	assert res.status_code == 401
	assert res.json()["error"]["message"] == "Unauthorized"


def test_out_of_range_cookie_is_unauthorized(client):
	for value in ("9" * 25, str(2**63)):
		client.cookies.set("auth_user_id", value)
		res = client.get("/api/items")

		assert res.status_code == 401
		assert res.json()["error"]["message"] == "Unauthorized"


def test_create_and_get_item(signed_in):
	client = signed_in()
	res = client.post("/api/items", json=item_body())
	assert res.status_code == 201
	item = res.json()
	assert item["name"] == "Dell XPS 13"
	assert item["sku"] == "XPS-13"
	assert item["quantity"] == 5
	assert item["price"] == 19.99
	assert item["category"] == "Laptop"
	assert item["created_at"]

	res = client.get(f"/api/items/{item['id']}")
	assert res.status_code == 200
	assert res.json() == item


def test_numeric_fields_are_coerced_from_strings(signed_in):
	client = signed_in()
	res = client.post(
		"/api/items",
		json=item_body(quantity="12", price="3.5", description="", category="  "),
	)

	assert res.status_code == 201
	item = res.json()
	assert item["quantity"] == 12
	assert item["price"] == 3.5
	assert item["description"] is None
	assert item["category"] is None


def test_negative_quantity_or_price_is_rejected(signed_in):
	client = signed_in()

	assert client.post("/api/items", json=item_body(quantity=-1)).status_code == 400
	assert client.post("/api/items", json=item_body(price=-1)).status_code == 400
	assert client.get("/api/items").json()["total"] == 0


def test_zero_quantity_and_price_are_allowed(signed_in):
	client = signed_in()

	res = client.post("/api/items", json=item_body(quantity=0, price=0))
	assert res.status_code == 201
	assert res.json()["quantity"] == 0
	assert res.json()["price"] == 0


def test_item_validation(signed_in):
	client = signed_in()

	assert client.post("/api/items", json=item_body(quantity="abc")).status_code == 400
	assert client.post("/api/items", json=item_body(price="free")).status_code == 400
	assert client.post("/api/items", json=item_body(quantity=1.5)).status_code == 400
	assert client.post("/api/items", json=item_body(name="   ")).status_code == 400

	body = item_body()
	del body["sku"]
	res = client.post("/api/items", json=body)
	assert res.status_code == 400
	assert "sku" in res.json()["error"]["message"]


def test_duplicate_sku_for_same_user_conflicts(signed_in):
	client = signed_in()
	assert client.post("/api/items", json=item_body()).status_code == 201

	res = client.post("/api/items", json=item_body(name="Another"))
	assert res.status_code == 409
	assert res.json()["error"]["message"] == "SKU already exists"


def test_same_sku_allowed_across_users(signed_in):
	alice = signed_in("alice")
	bob = signed_in("bob")

	assert alice.post("/api/items", json=item_body()).status_code == 201
	assert bob.post("/api/items", json=item_body()).status_code == 201


def test_items_are_invisible_to_other_users(signed_in):
	alice = signed_in("alice")
	bob = signed_in("bob")
	item_id = alice.post("/api/items", json=item_body()).json()["id"]

	res = bob.get(f"/api/items/{item_id}")
	assert res.status_code == 404
	assert res.json()["error"]["message"] == "Item not found"
	assert bob.put(f"/api/items/{item_id}", json=item_body(name="Hijacked")).status_code == 404
	assert bob.delete(f"/api/items/{item_id}").status_code == 404
	assert bob.get("/api/items").json()["total"] == 0

	res = alice.get(f"/api/items/{item_id}")
	assert res.status_code == 200
	assert res.json()["name"] == "Dell XPS 13"


def test_missing_item_looks_like_foreign_item(signed_in):
	client = signed_in()
	res = client.get("/api/items/12345")

	assert res.status_code == 404
	assert res.json()["error"]["message"] == "Item not found"


def test_out_of_range_item_id_is_not_found(signed_in):
	client = signed_in()
	huge = "9" * 25

	assert client.get(f"/api/items/{huge}").status_code == 404
	assert client.put(f"/api/items/{huge}", json=item_body()).status_code == 404
	assert client.delete(f"/api/items/{huge}").status_code == 404


def test_update_item(signed_in):
	client = signed_in()
	item_id = client.post("/api/items", json=item_body()).json()["id"]

	res = client.put(
		f"/api/items/{item_id}",
		json=item_body(name="Dell XPS 15", quantity=2, price=25.5, category=None),
	)
	assert res.status_code == 200
	item = res.json()
	assert item["id"] == item_id
	assert item["name"] == "Dell XPS 15"
	assert item["sku"] == "XPS-13"
	assert item["quantity"] == 2
	assert item["price"] == 25.5
	assert item["category"] is None


def test_update_validates_like_create(signed_in):
	client = signed_in()
	item_id = client.post("/api/items", json=item_body()).json()["id"]

	assert client.put(f"/api/items/{item_id}", json=item_body(quantity=-1)).status_code == 400
	assert client.get(f"/api/items/{item_id}").json()["quantity"] == 5


def test_update_to_existing_sku_conflicts(signed_in):
	client = signed_in()
	client.post("/api/items", json=item_body(sku="A-1"))
	second_id = client.post("/api/items", json=item_body(sku="B-2")).json()["id"]

	res = client.put(f"/api/items/{second_id}", json=item_body(sku="A-1"))
	assert res.status_code == 409
	assert client.get(f"/api/items/{second_id}").json()["sku"] == "B-2"


def test_delete_item_twice(signed_in):
	client = signed_in()
	item_id = client.post("/api/items", json=item_body()).json()["id"]

	res = client.delete(f"/api/items/{item_id}")
	assert res.status_code == 200
	assert res.json()["message"]

	assert client.delete(f"/api/items/{item_id}").status_code == 404
	assert client.get(f"/api/items/{item_id}").status_code == 404


def test_pagination(signed_in):
	client = signed_in()
	for i in range(25):
		res = client.post("/api/items", json=item_body(name=f"Item {i}", sku=f"SKU-{i:03d}"))
		assert res.status_code == 201

	res = client.get("/api/items", params={"page": 3, "limit": 10})
	data = res.json()
	assert res.status_code == 200
	assert len(data["items"]) == 5
	assert data["total"] == 25
	assert data["page"] == 3
	assert data["totalPages"] == 3

	first_page = client.get("/api/items", params={"page": 1, "limit": 10}).json()
	assert first_page["items"][0]["sku"] == "SKU-024"
	assert len(first_page["items"]) == 10


def test_empty_list(signed_in):
	client = signed_in()
	data = client.get("/api/items").json()

	assert data == {"items": [], "total": 0, "page": 1, "totalPages": 0}


def test_list_query_validation(signed_in):
	client = signed_in()

	assert client.get("/api/items", params={"page": 0}).status_code == 400
	assert client.get("/api/items", params={"limit": 0}).status_code == 400
	assert client.get("/api/items", params={"page": "9" * 25}).status_code == 400


def test_search_matches_name_or_sku_case_insensitively(signed_in):
	client = signed_in()
	client.post("/api/items", json=item_body(name="Dell XPS", sku="LAP-1"))
	client.post("/api/items", json=item_body(name="ThinkPad", sku="lap-dell-2"))
	client.post("/api/items", json=item_body(name="Office chair", sku="CHR-1", category="Furniture"))

	data = client.get("/api/items", params={"search": "DELL"}).json()
	names = sorted(item["name"] for item in data["items"])
	assert names == ["Dell XPS", "ThinkPad"]
	assert data["total"] == 2

	data = client.get("/api/items", params={"search": "chr"}).json()
	assert [item["name"] for item in data["items"]] == ["Office chair"]


def test_search_treats_wildcards_literally(signed_in):
	client = signed_in()
	client.post("/api/items", json=item_body(name="100% cotton", sku="TX-1"))
	client.post("/api/items", json=item_body(name="Wool", sku="TX-2"))

	data = client.get("/api/items", params={"search": "%"}).json()
	assert [item["name"] for item in data["items"]] == ["100% cotton"]


def test_category_filter_is_exact(signed_in):
	client = signed_in()
	client.post("/api/items", json=item_body(sku="A", category="Laptop"))
	client.post("/api/items", json=item_body(sku="B", category="Laptop bags"))
	client.post("/api/items", json=item_body(sku="C", category=None))

	data = client.get("/api/items", params={"category": "Laptop"}).json()
	assert [item["sku"] for item in data["items"]] == ["A"]


def test_stats(signed_in):
	alice = signed_in("alice")
	bob = signed_in("bob")
	alice.post("/api/items", json=item_body(sku="A", quantity=5, price=10))
	alice.post("/api/items", json=item_body(sku="B", quantity=20, price=2.5))
	bob.post("/api/items", json=item_body(sku="A", quantity=1, price=1000))

	res = alice.get("/api/items/stats")
	assert res.status_code == 200
	assert res.json() == {"total": 2, "totalValue": 100.0, "lowStock": 1}


def test_stats_for_empty_inventory(signed_in):
	client = signed_in()
	assert client.get("/api/items/stats").json() == {"total": 0, "totalValue": 0.0, "lowStock": 0}


def test_categories_are_distinct_sorted_and_owner_scoped(signed_in):
	alice = signed_in("alice")
	bob = signed_in("bob")
	alice.post("/api/items", json=item_body(sku="A", category="Tools"))
	alice.post("/api/items", json=item_body(sku="B", category="Laptop"))
	alice.post("/api/items", json=item_body(sku="C", category="Tools"))
	alice.post("/api/items", json=item_body(sku="D", category=None))
	bob.post("/api/items", json=item_body(sku="A", category="Garden"))

	assert alice.get("/api/items/categories").json() == ["Laptop", "Tools"]
