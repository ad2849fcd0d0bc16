"""Contrato del servicio remoto (Taiga).

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los servicios del Core dependen de esta abstracción; el adaptador httpx la
  implementa y los tests pueden sustituirlo.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TaigaGateway(Protocol):
    """Las tres llamadas remotas que necesita el aprovisionamiento.

    Reglas de diseño:
    - Todas son asíncronas porque hacen I/O (HTTP).
    - El token se pasa explícitamente en cada llamada: se escribe una vez y
      luego solo se lee.
    - Devuelven el cuerpo JSON decodificado; la interpretación es del Core.
    """

    async def login(self, username: str, password: str) -> dict[str, Any]:
        """`POST /auth` con credenciales de administrador."""

        ...

    async def create_project(self, token: str, payload: dict[str, Any]) -> dict[str, Any]:
        """`POST /projects` con bearer token."""

        ...

    async def create_membership(self, token: str, payload: dict[str, Any]) -> dict[str, Any]:
        """`POST /memberships` con bearer token."""

        ...
