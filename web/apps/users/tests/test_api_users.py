import pytest


@pytest.mark.django_db
def test_list_and_get_users(client, make_user):
    u = make_user(name="Maria Brown", email="maria@gmail.com", phone="988888888")
    make_user(name="Alex Green", email="alex@gmail.com")

    body = client.get("/api/users").json()
    assert [x["name"] for x in body["results"]] == ["Maria Brown", "Alex Green"]

    r = client.get(f"/api/users/{u.id}")
    assert r.status_code == 200
    assert r.json() == {"id": u.id, "name": "Maria Brown", "email": "maria@gmail.com", "phone": "988888888"}


@pytest.mark.django_db
def test_get_missing_user_returns_404(client):
    r = client.get("/api/users/9")
    assert r.status_code == 404
    assert r.json()["id"] == 9
