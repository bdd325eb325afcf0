"""
Soft-delete CRUD endpoints, generated for every entry of the resource table.
Operations listed as protected on a resource require a bearer token.
"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from ...core.resources import ResourceConfig
from ...db.database import UnitOfWork
from ...services.crud_service import CrudService
from ..dependencies import get_current_user, get_unit_of_work


def build_resource_router(resource: ResourceConfig) -> APIRouter:
    """
    Build the REST router for a resource.

    Args:
        resource: Resource description from the resource table

    Returns:
        Router exposing list, get, create, update and delete
    """
    router = APIRouter(prefix=f"/{resource.name}", tags=[resource.label])

    create_schema = resource.create_schema
    update_schema = resource.update_schema
    response_schema = resource.response_schema

    def guard(operation: str) -> list:
        return [Depends(get_current_user)] if resource.requires_auth(operation) else []

    def get_service(uow: UnitOfWork = Depends(get_unit_of_work)) -> CrudService:
        return resource.service_class(uow, resource)

    @router.get(
        "",
        response_model=List[response_schema],
        name=f"list_{resource.name}",
        dependencies=guard("list"),
    )
    async def list_items(service: CrudService = Depends(get_service)):
        """List every item that has not been deleted."""
        return [response_schema.model_validate(item) for item in service.list()]

    @router.get(
        "/{item_id}",
        response_model=response_schema,
        name=f"get_{resource.name}",
        dependencies=guard("get"),
    )
    async def get_item(item_id: int, service: CrudService = Depends(get_service)):
        """Get a single item by id."""
        return response_schema.model_validate(service.get(item_id))

    @router.post(
        "",
        response_model=response_schema,
        status_code=status.HTTP_201_CREATED,
        name=f"create_{resource.name}",
        dependencies=guard("create"),
    )
    async def create_item(
        payload: create_schema,
        request: Request,
        response: Response,
        service: CrudService = Depends(get_service)
    ):
        """Create an item and point the Location header at it."""
        item = service.create(payload)
        response.headers["Location"] = str(
            request.url_for(f"get_{resource.name}", item_id=item.id)
        )
        return response_schema.model_validate(item)

    @router.put(
        "/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"update_{resource.name}",
        dependencies=guard("update"),
    )
    async def update_item(
        item_id: int,
        payload: update_schema,
        service: CrudService = Depends(get_service)
    ):
        """Replace the mutable fields of an item."""
        service.update(item_id, payload)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete(
        "/{item_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"delete_{resource.name}",
        dependencies=guard("delete"),
    )
    async def delete_item(item_id: int, service: CrudService = Depends(get_service)):
        """Soft-delete an item."""
        service.soft_delete(item_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
