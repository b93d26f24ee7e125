"""Tenant context for request-scoped data isolation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class TenantContext:
    """
    Immutable scope of one request or command execution.

    Created once per request and passed explicitly to repositories, which
    filter every read and write by ``tenant_id``. ``user_id`` is the acting
    user, recorded on audit fields; it never widens the scope.
    """

    tenant_id: UUID
    user_id: Optional[UUID] = None

    @classmethod
    def from_values(
        cls,
        tenant_id: UUID | str,
        user_id: UUID | str | None = None,
    ) -> TenantContext:
        return cls(
            tenant_id=tenant_id if isinstance(tenant_id, UUID) else UUID(tenant_id),
            user_id=(
                user_id
                if user_id is None or isinstance(user_id, UUID)
                else UUID(user_id)
            ),
        )

    def __str__(self) -> str:
        return f"TenantContext({self.tenant_id})"
