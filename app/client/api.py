"""
Catalog API client - the calls a frontend makes, with the session attached.
Results are returned, not raised, so callers can show the message directly.
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.client.session import ClientSession
from app.schemas.user import UserPublic

logger = logging.getLogger(__name__)


@dataclass
class ClientResult:
    success: bool
    message: str = ""
    data: Any = None


def _message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or fallback
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return fallback


class CatalogClient:
    """Async wrapper over /api/auth and /api/products."""

    def __init__(self, http: httpx.AsyncClient, session: ClientSession | None = None):
        self.http = http
        self.session = session or ClientSession()
        self.products: list[dict] = []

    def _auth_headers(self) -> dict[str, str]:
        if not self.session.token:
            return {}
        return {"Authorization": f"Bearer {self.session.token}"}

    def _result(self, response: httpx.Response, fallback: str) -> ClientResult:
        if response.status_code == 401:
            # Server says the token is no longer good; drop it like a logout
            self.session.clear()
        if response.is_success:
            return ClientResult(success=True, message=fallback, data=response.json())
        return ClientResult(success=False, message=_message(response, "Server error"))

    async def _authenticate(self, path: str, payload: dict) -> ClientResult:
        response = await self.http.post(path, json=payload)
        if not response.is_success:
            return ClientResult(success=False, message=_message(response, "Authentication failed"))
        body = response.json()
        self.session.set(body["token"], UserPublic.model_validate(body["user"]))
        return ClientResult(success=True, message="Logged in", data=body["user"])

    async def register(self, name: str, email: str, password: str, role: str | None = None) -> ClientResult:
        payload = {"name": name, "email": email, "password": password}
        if role is not None:
            payload["role"] = role
        return await self._authenticate("/api/auth/register", payload)

    async def login(self, email: str, password: str) -> ClientResult:
        return await self._authenticate("/api/auth/login", {"email": email, "password": password})

    def logout(self) -> None:
        self.session.clear()

    async def fetch_products(self) -> ClientResult:
        response = await self.http.get("/api/products")
        result = self._result(response, "Products loaded")
        if result.success:
            self.products = result.data["data"]
            result.data = self.products
        return result

    async def create_product(self, name: Any, price: Any, image: Any) -> ClientResult:
        if not name or not image or not price:
            return ClientResult(success=False, message="please fill all fields")
        response = await self.http.post(
            "/api/products",
            json={"name": name, "price": price, "image": image},
            headers=self._auth_headers(),
        )
        result = self._result(response, "product created successfully")
        if result.success:
            result.data = result.data["data"]
            self.products.append(result.data)
        return result

    async def update_product(self, product_id: str, **fields: Any) -> ClientResult:
        response = await self.http.put(
            f"/api/products/{product_id}",
            json=fields,
            headers=self._auth_headers(),
        )
        result = self._result(response, "Product updated successfully")
        if result.success:
            result.data = result.data["data"]
            self.products = [result.data if p["id"] == product_id else p for p in self.products]
        return result

    async def delete_product(self, product_id: str) -> ClientResult:
        response = await self.http.delete(f"/api/products/{product_id}", headers=self._auth_headers())
        result = self._result(response, "Product deleted")
        if result.success:
            result.message = result.data.get("message", result.message)
            result.data = None
            self.products = [p for p in self.products if p["id"] != product_id]
        return result
