from __future__ import annotations

import logging
from typing import List

from rentdesk.clients.backend import BackendClient
from rentdesk.schemas.product import (
    Product,
    ProductCreateRequest,
    ProductListRequest,
    ProductListResponse,
    ProductUpdateRequest,
)
from rentdesk.services.base import BackendService
from rentdesk.services.exceptions import RecordNotFoundError
from rentdesk.services.mock_store import ProductRepository, get_mock_store

logger = logging.getLogger(__name__)


class ProductService(BackendService):
    def __init__(
        self,
        client: BackendClient,
        *,
        repository: ProductRepository | None = None,
    ) -> None:
        super().__init__(client)
        self._repository = repository
        if self.use_mock_data:
            self._repository = repository or get_mock_store().products

    async def create(self, request: ProductCreateRequest) -> Product:
        logger.info("Creating product %s", request.name)
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.create(request)

        data = await self._remote(
            "create product", self._client.post("/products", request.model_dump())
        )
        return Product(**data.get("product", data))

    async def list(self, request: ProductListRequest) -> ProductListResponse:
        logger.debug("Listing products page %s", request.page)
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.list(request)

        params = request.model_dump(exclude_none=True)
        data = await self._remote("list products", self._client.get("/products", params))
        return ProductListResponse(**data)

    async def get(self, product_id: str) -> Product:
        if self.use_mock_data:
            await self._client.simulate_latency()
            product = await self._repository.get(product_id)
            if product is None:
                raise RecordNotFoundError(f"Product {product_id} not found")
            return product

        data = await self._remote("fetch product", self._client.get(f"/products/{product_id}"))
        return Product(**data.get("product", data))

    async def update(self, product_id: str, request: ProductUpdateRequest) -> Product:
        logger.info("Updating product %s", product_id)
        if self.use_mock_data:
            await self._client.simulate_latency()
            return await self._repository.update(product_id, request)

        data = await self._remote(
            "update product",
            self._client.put(f"/products/{product_id}", request.model_dump(exclude_unset=True)),
        )
        return Product(**data.get("product", data))

    async def remove(self, product_id: str) -> None:
        logger.info("Removing product %s", product_id)
        if self.use_mock_data:
            await self._client.simulate_latency()
            if not await self._repository.delete(product_id):
                raise RecordNotFoundError(f"Product {product_id} not found")
            return

        await self._remote("remove product", self._client.delete(f"/products/{product_id}"))

    async def categories(self) -> List[str]:
        if self.use_mock_data:
            return await self._repository.categories()
        data = await self._remote("list categories", self._client.get("/products/categories"))
        return list(data.get("categories", []))

    async def brands(self) -> List[str]:
        if self.use_mock_data:
            return await self._repository.brands()
        data = await self._remote("list brands", self._client.get("/products/brands"))
        return list(data.get("brands", []))
