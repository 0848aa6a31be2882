"""
Tests for the products API endpoints (/api/products).
"""

import pytest
from httpx import AsyncClient

from factories import ProductFactory

PRODUCTS = "/api/products"


class TestProductCrud:

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, authenticated_client: AsyncClient):
        payload = ProductFactory(name="Test Product", description="Test product description", price=99.99)
        response = await authenticated_client.post(PRODUCTS, json=payload)
        assert response.status_code == 201, response.text
        created = response.json()
        assert created["price"] == 99.99

        response = await authenticated_client.get(f"{PRODUCTS}/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"id": created["id"], **payload}

    @pytest.mark.asyncio
    async def test_description_is_optional(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(PRODUCTS, json={"name": "Bare", "price": 1})
        assert response.status_code == 201
        assert response.json()["description"] is None

    @pytest.mark.asyncio
    async def test_list(self, authenticated_client: AsyncClient):
        for _ in range(3):
            await authenticated_client.post(PRODUCTS, json=ProductFactory())
        response = await authenticated_client.get(PRODUCTS)
        assert response.status_code == 200
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_update(self, authenticated_client: AsyncClient):
        created = (await authenticated_client.post(PRODUCTS, json=ProductFactory())).json()
        response = await authenticated_client.put(
            f"{PRODUCTS}/{created['id']}",
            json={"name": "Updated", "description": None, "price": 12.5},
        )
        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "name": "Updated", "description": None, "price": 12.5}

    @pytest.mark.asyncio
    async def test_delete_unreferenced(self, authenticated_client: AsyncClient):
        created = (await authenticated_client.post(PRODUCTS, json=ProductFactory())).json()
        response = await authenticated_client.delete(f"{PRODUCTS}/{created['id']}")
        assert response.status_code == 204
        assert (await authenticated_client.get(f"{PRODUCTS}/{created['id']}")).status_code == 404


class TestProductValidation:

    @pytest.mark.asyncio
    async def test_negative_price_rejected(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(PRODUCTS, json={"name": "Bad", "price": -1})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_more_than_two_decimals_rejected(self, authenticated_client: AsyncClient):
        response = await authenticated_client.post(PRODUCTS, json={"name": "Bad", "price": 1.005})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_and_invalid_ids(self, authenticated_client: AsyncClient):
        assert (await authenticated_client.get(f"{PRODUCTS}/404")).status_code == 404
        assert (await authenticated_client.get(f"{PRODUCTS}/invalid")).status_code == 400
