"""Sample API tests - plain CRUD through the envelope."""


def create_sample(client, value=5):
    response = client.post("/api/samples", json={"test": value})
    assert response.status_code == 201, response.text
    return response.json()["payload"]


def test_create_and_get_sample(client):
    sample = create_sample(client, 5)

    assert sample["test"] == 5
    fetched = client.get(f"/api/samples/{sample['id']}").json()["payload"]
    assert fetched["test"] == 5


def test_create_sample_requires_integer_test(client):
    response = client.post("/api/samples", json={"test": "five"})

    assert response.status_code == 400
    assert response.json()["error"].startswith("test")


def test_list_samples(client):
    create_sample(client, 1)
    create_sample(client, 2)

    payload = client.get("/api/samples").json()["payload"]

    assert [s["test"] for s in payload] == [1, 2]


def test_update_sample(client):
    sample = create_sample(client, 1)

    response = client.put(f"/api/samples/{sample['id']}", json={"test": 9})

    assert response.status_code == 200
    assert client.get(f"/api/samples/{sample['id']}").json()["payload"]["test"] == 9


def test_update_missing_sample_is_404(client):
    response = client.put("/api/samples/12345", json={"test": 9})

    assert response.status_code == 404


def test_delete_sample(client):
    sample = create_sample(client)

    response = client.delete(f"/api/samples/{sample['id']}")

    assert response.status_code == 200
    assert response.json()["payload"]["modified_count"] == 1
    assert client.get(f"/api/samples/{sample['id']}").status_code == 404
    assert client.delete(f"/api/samples/{sample['id']}").status_code == 404
