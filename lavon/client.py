from __future__ import annotations

from typing import Any, Optional

import httpx


class SalesApiClient:
    """HTTP client for the remote sales API that owns the persistent records.

    Responses from that API are wrapped as ``{"success": ..., "data": ...}``;
    every method returns the unwrapped ``data`` payload.
    """

    def __init__(
        self,
        api_base_url: str,
        *,
        token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.client = httpx.AsyncClient(
            base_url=api_base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(timeout=timeout, connect=10.0),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    @staticmethod
    def _unwrap(response: httpx.Response) -> Any:
        response.raise_for_status()
        body = response.json()
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    async def get_current_user(self) -> dict[str, Any]:
        response = await self.client.get("/me")
        return self._unwrap(response)

    async def list_sales(
        self,
        *,
        page: int = 1,
        search: str | None = None,
        status: str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"page": max(page, 1)}
        if search:
            params["search"] = search
        if status:
            params["status"] = status
        response = await self.client.get("/sales", params=params)
        return self._unwrap(response)

    async def get_sale(self, sale_id: int | str) -> dict[str, Any]:
        response = await self.client.get(f"/sales/{sale_id}")
        return self._unwrap(response)

    async def add_payment(
        self,
        sale_id: int | str,
        *,
        amount: float,
        price: float | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"add_payment": amount}
        if price is not None:
            payload["price"] = price
        response = await self.client.put(f"/sales/{sale_id}", json=payload)
        return self._unwrap(response)
