"""Shared request builders for API tests."""
import json

PRODUCTS_URL = "/api/admin/products"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def product_data(**overrides):
    data = {
        "name": "Rose Essential Oil",
        "description": "Steam distilled",
        "category": "Essential Oils",
        "price": 250.0,
        "originalPrice": 300.0,
        "inStock": True,
        "variants": [
            {
                "price": 250.0,
                "originalPrice": 300.0,
                "stockQuantity": 10,
                "weightValue": "100",
                "weightUnit": "ML",
            }
        ],
    }
    data.update(overrides)
    return data


def multipart_product(data, image=None):
    """Build multipart files the way the admin UI does: product as a JSON blob."""
    files = {"product": ("blob", json.dumps(data).encode(), "application/json")}
    if image is not None:
        files["image"] = image
    return files


def png(name="rose.png", content=PNG_BYTES):
    return (name, content, "image/png")


def create_product(client, image=None, **overrides):
    response = client.post(
        PRODUCTS_URL,
        files=multipart_product(product_data(**overrides), image)
    )
    assert response.status_code == 200, response.text
    return response.json()


def image_name(product):
    return product["imageUrl"].rsplit("/", 1)[-1]
