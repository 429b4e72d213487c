"""Ownership checks applied before owner-only mutations."""

from __future__ import annotations

from typing import Any, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from services.errors import AuthorizationError, NotFoundError

ModelT = TypeVar("ModelT")


def ensure_owner(resource: Any, principal_id: str) -> None:
    if str(resource.owner_id) != str(principal_id):
        raise AuthorizationError("Unauthorized request")


async def get_owned_or_raise(
    db: AsyncSession,
    model: Type[ModelT],
    resource_id: str,
    principal_id: str,
    *,
    label: str,
) -> ModelT:
    """Load a resource and require the principal to own it.

    A missing resource fails with NotFoundError before ownership is compared.
    """
    resource = await db.get(model, resource_id)
    if resource is None:
        raise NotFoundError(f"{label} not found")
    ensure_owner(resource, principal_id)
    return resource
