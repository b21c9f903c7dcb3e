"""Request helpers shared by the API tests."""

DEFAULT_PASSWORD = "pw123456"


def register(client, email, password=DEFAULT_PASSWORD, name=None):
    body = {"email": email, "password": password}
    if name:
        body["name"] = name
    return client.post("/api/auth/register", json=body)


def login(client, email, password=DEFAULT_PASSWORD):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def auth_headers(client, email, password=DEFAULT_PASSWORD):
    """Register (if needed) and log in, returning the Authorization header."""
    register(client, email, password)
    response = login(client, email, password)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}
