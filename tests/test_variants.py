"""Tests for Variant API endpoints."""
from helpers import PRODUCTS_URL, create_product, product_data

VARIANTS_URL = f"{PRODUCTS_URL}/variants"


def _variant_id(client, stock=10):
    product = create_product(
        client,
        variants=[{"price": 120.0, "stockQuantity": stock, "weightValue": "50"}]
    )
    return product["variants"][0]["id"]


def test_list_variants(client):
    """Test listing variants across products."""
    create_product(client)
    create_product(
        client,
        variants=[
            {"price": 100.0, "stockQuantity": 1},
            {"price": 180.0, "stockQuantity": 2},
        ]
    )

    response = client.get(VARIANTS_URL)

    assert response.status_code == 200
    assert len(response.json()) == 3


def test_list_variants_empty(client):
    """Test listing variants with none stored."""
    response = client.get(VARIANTS_URL)

    assert response.status_code == 200
    assert response.json() == []


def test_get_variant(client):
    """Test getting a variant by ID."""
    variant_id = _variant_id(client)

    response = client.get(f"{VARIANTS_URL}/{variant_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == variant_id
    assert data["stockQuantity"] == 10
    assert data["weightValue"] == "50"
    assert data["weightUnit"] == "ML"


def test_get_variant_not_found(client):
    """Test getting non-existent variant returns 404."""
    response = client.get(f"{VARIANTS_URL}/9999")

    assert response.status_code == 404


def test_update_stock_round_trip(client):
    """Test -5 then +5 returns stock to its original value."""
    variant_id = _variant_id(client, stock=10)

    response = client.put(f"{VARIANTS_URL}/{variant_id}/stock?delta=-5")
    assert response.status_code == 204
    assert client.get(f"{VARIANTS_URL}/{variant_id}").json()["stockQuantity"] == 5

    response = client.put(f"{VARIANTS_URL}/{variant_id}/stock?delta=5")
    assert response.status_code == 204
    assert client.get(f"{VARIANTS_URL}/{variant_id}").json()["stockQuantity"] == 10


def test_update_stock_may_go_negative(client):
    """Test stock deltas are not floored at zero."""
    variant_id = _variant_id(client, stock=2)

    response = client.put(f"{VARIANTS_URL}/{variant_id}/stock?delta=-5")

    assert response.status_code == 204
    assert client.get(f"{VARIANTS_URL}/{variant_id}").json()["stockQuantity"] == -3


def test_update_stock_requires_delta(client):
    """Test the delta query parameter is mandatory."""
    variant_id = _variant_id(client)

    response = client.put(f"{VARIANTS_URL}/{variant_id}/stock")

    assert response.status_code == 422


def test_update_stock_unknown_variant(client):
    """Test a stock delta for a missing variant is accepted without effect."""
    response = client.put(f"{VARIANTS_URL}/9999/stock?delta=3")

    assert response.status_code == 204


def test_delete_variant(client):
    """Test deleting a variant leaves its product in place."""
    product = create_product(client)
    variant_id = product["variants"][0]["id"]

    response = client.delete(f"{VARIANTS_URL}/{variant_id}")
    assert response.status_code == 204

    assert client.get(f"{VARIANTS_URL}/{variant_id}").status_code == 404
    remaining = client.get(f"{PRODUCTS_URL}/{product['id']}").json()
    assert remaining["variants"] == []


def test_delete_variant_is_idempotent(client):
    """Test deleting a non-existent variant still returns 204."""
    response = client.delete(f"{VARIANTS_URL}/9999")

    assert response.status_code == 204


def test_variant_payload_rejects_negative_stock(client):
    """Test submitted variants must not carry negative stock."""
    response = client.put(
        f"{PRODUCTS_URL}/{create_product(client)['id']}",
        json=product_data(variants=[{"price": 10.0, "stockQuantity": -1}])
    )

    assert response.status_code == 422
