"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta en el borde (manifest JSON, respuestas de Taiga)
  sin acoplar el Core a librerías de I/O.
- Los alias permiten aceptar tanto snake_case como los nombres camelCase
  heredados de los manifests antiguos.

Nota:
- Estos modelos describen *qué* se aprovisiona, no *cómo* se envía.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, Field
from pydantic.config import ConfigDict

Identifier = int | str
Email = Annotated[str, Field(min_length=1)]


class Credentials(BaseModel):
    """Credenciales de administrador; se consumen una sola vez en la autenticación."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(..., min_length=1, description="Usuario administrador de Taiga.")
    password: str = Field(..., repr=False, description="Contraseña (nunca se registra).")


class SharedBoardOptions(BaseModel):
    """Plantilla compartida aplicada idénticamente a cada tablero de una ejecución.

    Por qué inmutable:
    - Cada request construye su propio payload a partir de esta plantilla, así
      que ninguna llamada concurrente puede alterar lo que envía otra.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    description: str = Field(
        default="",
        description="Descripción común a todos los tableros.",
    )
    is_private: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_private", "isPrivate"),
        description="Tablero privado (True) o público (False).",
    )
    backlog_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "backlog_enabled",
            "is_backlog_activated",
            "isBacklogActivated",
            "isBacklogActived",
        ),
        description="Activa el módulo de backlog.",
    )
    issues_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "issues_enabled",
            "is_issues_activated",
            "isIssuesActivated",
            "isIssuesActived",
        ),
        description="Activa el módulo de issues.",
    )
    kanban_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("kanban_enabled", "is_kanban_activated", "isKanbanActivated"),
        description="Activa el tablero Kanban.",
    )
    wiki_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("wiki_enabled", "is_wiki_activated", "isWikiActivated"),
        description="Activa la wiki del proyecto.",
    )

    def project_payload(self, name: str) -> dict[str, Any]:
        """Payload de `POST /projects`: la plantilla más el nombre único del tablero."""

        return {
            "name": name,
            "description": self.description,
            "is_private": self.is_private,
            "is_backlog_activated": self.backlog_enabled,
            "is_issues_activated": self.issues_enabled,
            "is_kanban_activated": self.kanban_enabled,
            "is_wiki_activated": self.wiki_enabled,
        }


class BoardRequest(BaseModel):
    """Un tablero deseado: nombre + emails de sus miembros (en orden)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1, description="Nombre del tablero (único por ejecución).")
    member_emails: list[Email] = Field(
        default_factory=list,
        validation_alias=AliasChoices("member_emails", "memberEmails", "emails"),
        description="Emails de los miembros a invitar, en el orden recibido.",
    )


class BoardRole(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Identifier
    name: str


class CreatedBoard(BaseModel):
    """Proyecto devuelto por Taiga tras `POST /projects`.

    Solo nos interesan `id` y `roles`: son la dependencia de datos entre la
    etapa de tableros y la de membresías.
    """

    model_config = ConfigDict(extra="ignore")

    id: Identifier = Field(..., description="Identificador generado por Taiga.")
    name: str | None = Field(default=None, description="Nombre confirmado por Taiga (si viene).")
    roles: list[BoardRole] = Field(
        default_factory=list,
        description="Roles disponibles en el tablero recién creado.",
    )


class MembershipRequest(BaseModel):
    """Concesión de un rol sobre un tablero a un email concreto."""

    model_config = ConfigDict(frozen=True)

    project: Identifier
    role: Identifier
    email: str = Field(..., min_length=1)

    def payload(self) -> dict[str, Any]:
        return {"project": self.project, "role": self.role, "email": self.email}


class MembershipRecord(BaseModel):
    """Resultado de `POST /memberships` (solo para el reporte)."""

    model_config = ConfigDict(extra="ignore")

    id: Identifier | None = None
    project: Identifier
    role: Identifier
    email: str


class ProvisioningManifest(BaseModel):
    """Documento de entrada de la CLI: plantilla compartida + tableros."""

    model_config = ConfigDict(extra="ignore")

    options: SharedBoardOptions = Field(default_factory=SharedBoardOptions)
    boards: list[BoardRequest] = Field(default_factory=list)


class BoardPlan(BaseModel):
    """Vista previa (dry-run) de lo que se enviaría para un tablero."""

    name: str
    payload: dict[str, Any]
    member_count: int = Field(default=0, ge=0)


class ProvisioningReport(BaseModel):
    """Señal de finalización de una ejecución completa.

    `boards` está alineado posicionalmente con la lista de `BoardRequest`;
    `memberships` sigue el orden de despacho.
    """

    boards: list[CreatedBoard] = Field(default_factory=list)
    memberships: list[MembershipRecord] = Field(default_factory=list)
