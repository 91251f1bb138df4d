"""Domain (tenant) context FastAPI dependency.

Resolves the tenant from the X-Domain-ID request header.

Usage in FastAPI routes:
    @router.get("/example")
    async def example(
        domain_id: Annotated[DomainId, Depends(get_domain_id)],
    ):
        ...
"""

from typing import Annotated

from fastapi import Header

from identity.domain.value_objects import DomainId
from identity.ports.exceptions import BadRequestError


async def get_domain_id(
    x_domain_id: Annotated[str | None, Header(alias="X-Domain-ID")] = None,
) -> DomainId:
    """Get the caller's domain from the X-Domain-ID header.

    Raises:
        BadRequestError: If the header is missing or blank
    """
    # TODO: read the domain from the access token once token parsing lands.
    if x_domain_id is None or not x_domain_id.strip():
        raise BadRequestError("X-Domain-ID header is required")
    return DomainId.from_string(x_domain_id)
