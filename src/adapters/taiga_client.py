"""Cliente HTTP de la API de Taiga (implementa `TaigaGateway`).

Superficie consumida:
- `POST /auth`        -> {"auth_token": ...}
- `POST /projects`    -> {"id": ..., "roles": [{"id", "name"}, ...]}
- `POST /memberships` -> registro de membresía

Cualquier respuesta >= 400 se convierte en `TaigaAPIError`; los errores de red
(`httpx.HTTPError`) se propagan sin tocar.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.errors import TaigaAPIError
from core.interfaces.gateway import TaigaGateway


class TaigaClient(TaigaGateway):
    """Implementación httpx del gateway.

    No guarda el token: cada llamada autenticada lo recibe como argumento.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def login(self, username: str, password: str) -> dict[str, Any]:
        body = {"type": "normal", "username": username, "password": password}
        return await self._post("/auth", body)

    async def create_project(self, token: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/projects", payload, token=token)

    async def create_membership(self, token: str, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._post("/memberships", payload, token=token)

    async def _post(self, path: str, body: dict[str, Any], *, token: str | None = None) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        resp = await self._client.post(path, json=body, headers=headers)
        if resp.status_code >= 400:
            raise TaigaAPIError(resp.status_code, resp.text, str(resp.url))

        data = resp.json()
        if not isinstance(data, dict):
            raise TaigaAPIError(resp.status_code, f"Unexpected response body: {resp.text}", str(resp.url))
        return data
