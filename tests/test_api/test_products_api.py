import pytest


@pytest.fixture
def catalog(make_product):
    return [
        make_product(name="Wireless Headphones", category="Electronics", brand="AudioX", price=99.99, rating=4.5),
        make_product(name="Running Shoes", category="Footwear", brand="SportFit", price=75.0, rating=4.8, availability=False),
        make_product(name="Gaming Mouse", category="Electronics", brand="GamePro", price=35.0, rating=4.1),
        make_product(name="Yoga Mat", category="Fitness", brand="ZenLife", price=25.0, rating=4.3),
    ]


def _names(response):
    assert response.status_code == 200
    return {p["name"] for p in response.json()}


def test_list_all_newest_first(client, catalog):
    response = client.get("/api/products")
    assert [p["name"] for p in response.json()] == [p.name for p in reversed(catalog)]


def test_filters(client, catalog):
    assert _names(client.get("/api/products", params={"search": "MOUSE"})) == {"Gaming Mouse"}
    assert _names(client.get("/api/products", params={"category": "Electronics"})) == {"Wireless Headphones", "Gaming Mouse"}
    assert _names(client.get("/api/products", params={"brand": "ZenLife"})) == {"Yoga Mat"}
    assert _names(client.get("/api/products", params={"rating": 4.4})) == {"Wireless Headphones", "Running Shoes"}
    assert _names(client.get("/api/products", params={"price": 40})) == {"Gaming Mouse", "Yoga Mat"}
    assert "Running Shoes" not in _names(client.get("/api/products", params={"availability": "true"}))
    assert _names(
        client.get("/api/products", params={"category": "Electronics", "price": 50})
    ) == {"Gaming Mouse"}


def test_get_product(client, catalog):
    product = catalog[0]
    response = client.get(f"/api/products/{product.id}")
    assert response.status_code == 200
    assert response.json()["brand"] == "AudioX"
    assert client.get("/api/products/999999").status_code == 404


def test_distinct_values_are_sorted(client, catalog):
    assert client.get("/api/categories").json() == ["Electronics", "Fitness", "Footwear"]
    assert client.get("/api/brands").json() == ["AudioX", "GamePro", "SportFit", "ZenLife"]


def test_root(client):
    assert client.get("/").json() == {"message": "EverCart API running"}
