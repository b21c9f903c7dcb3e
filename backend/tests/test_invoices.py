INVOICE = {
    "client": "ACME Corp\n1 Road Runner Way",
    "companyInfo": {"name": "Alice Ltd", "address": "2 Main St", "email": "billing@alice.test", "phone": "555"},
    "items": [
        {"description": "Design", "quantity": 2, "price": 5},
        {"description": "Hosting", "quantity": 1, "price": 20},
    ],
    "total": 30,
}


def test_create_and_fetch_invoice(client, alice_headers):
    created = client.post("/api/invoices", json=INVOICE, headers=alice_headers)

    assert created.status_code == 201
    invoice = created.json()
    assert invoice["id"]
    assert invoice["client"] == INVOICE["client"]
    assert invoice["companyInfo"]["name"] == "Alice Ltd"
    assert [item["description"] for item in invoice["items"]] == ["Design", "Hosting"]

    fetched = client.get(f"/api/invoices/{invoice['id']}", headers=alice_headers)
    assert fetched.status_code == 200
    assert fetched.json() == invoice


def test_total_is_stored_as_sent(client, alice_headers):
    body = {"client": "ACME", "items": [{"quantity": 2, "price": 5}], "total": 999}

    invoice = client.post("/api/invoice", json=body, headers=alice_headers).json()

    assert invoice["total"] == 999
    assert client.get(f"/api/invoices/{invoice['id']}", headers=alice_headers).json()["total"] == 999


def test_invoice_requires_client_items_and_total(client, alice_headers):
    for missing in ("client", "items", "total"):
        body = {k: v for k, v in INVOICE.items() if k != missing}
        response = client.post("/api/invoices", json=body, headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing invoice data."


def test_zero_total_is_accepted(client, alice_headers):
    body = {**INVOICE, "items": [], "total": 0}

    assert client.post("/api/invoices", json=body, headers=alice_headers).status_code == 201


def test_invoices_are_listed_newest_first(client, alice_headers):
    first = client.post("/api/invoices", json={**INVOICE, "client": "first"}, headers=alice_headers).json()
    second = client.post("/api/invoices", json={**INVOICE, "client": "second"}, headers=alice_headers).json()

    listing = client.get("/api/invoices", headers=alice_headers).json()

    assert [i["id"] for i in listing] == [second["id"], first["id"]]


def test_update_merges_fields(client, alice_headers):
    invoice = client.post("/api/invoices", json=INVOICE, headers=alice_headers).json()

    updated = client.put(f"/api/invoices/{invoice['id']}", json={"total": 42}, headers=alice_headers)

    assert updated.status_code == 200
    assert updated.json()["total"] == 42
    assert updated.json()["client"] == INVOICE["client"]


def test_update_cannot_clear_items_or_total(client, alice_headers):
    invoice = client.post("/api/invoices", json=INVOICE, headers=alice_headers).json()

    for body in ({"total": None}, {"items": None}, {"total": None, "items": None}):
        response = client.put(f"/api/invoices/{invoice['id']}", json=body, headers=alice_headers)

        assert response.status_code == 400
        assert response.json()["message"] == "Missing invoice data."

    stored = client.get(f"/api/invoices/{invoice['id']}", headers=alice_headers).json()
    assert stored["total"] == INVOICE["total"]
    assert len(stored["items"]) == 2


def test_delete_invoice(client, alice_headers):
    invoice = client.post("/api/invoices", json=INVOICE, headers=alice_headers).json()

    assert client.delete(f"/api/invoices/{invoice['id']}", headers=alice_headers).status_code == 204
    assert client.get(f"/api/invoices/{invoice['id']}", headers=alice_headers).status_code == 404
    assert client.delete(f"/api/invoices/{invoice['id']}", headers=alice_headers).status_code == 404


def test_deleting_a_contact_leaves_invoice_snapshot_alone(client, alice_headers):
    contact = client.post("/api/address-book", json={"name": "ACME"}, headers=alice_headers).json()
    invoice = client.post("/api/invoices", json={**INVOICE, "client": "ACME"}, headers=alice_headers).json()

    client.delete(f"/api/address-book/{contact['id']}", headers=alice_headers)

    assert client.get(f"/api/invoices/{invoice['id']}", headers=alice_headers).json()["client"] == "ACME"
