import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from core.errors import RecError, StoreError
from core.models.entity import Entity, EntityType, type_from_type_name
from core.services.entity_manager import entity_manager
from routers.hydra import DEFAULT_PAGE, DEFAULT_SIZE, collection_response, ld_json
from schemas import EntityModel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["entities"])

ENTITY_COLLECTIONS = {
    "/spaces": EntityType.SPACE,
    "/buildings": EntityType.BUILDING,
    "/sensors": EntityType.SENSOR,
}


def _root_entity(root_id: Optional[str], root_type: Optional[str]) -> Optional[Entity]:
    """Resolve root[id] and root[type], anything unresolvable means no root."""
    if not root_id or not root_type:
        return None
    try:
        return entity_manager.get_entity(root_id, type_from_type_name(root_type))
    except RecError:
        return None


def _register(path: str, entity_type: EntityType) -> None:
    name = entity_type.type_name

    @router.get(path, name=f"get_{name}_entities", responses={
        400: {"description": "Child entities could not be loaded for the given root."},
        500: {"description": "Entities could not be loaded."},
    })
    def get_entities(
        request: Request,
        page: int = Query(DEFAULT_PAGE, ge=0),
        size: int = Query(DEFAULT_SIZE, ge=1),
        root_id: Optional[str] = Query(None, alias="root[id]"),
        root_type: Optional[str] = Query(None, alias="root[type]"),
    ) -> JSONResponse:
        """
        List entities of this type.
        With root[id] and root[type] all descendants of that root are returned
        unpaged, otherwise one page of the collection.
        """
        root = _root_entity(root_id, root_type)
        if root is not None:
            try:
                entities = entity_manager.get_child_entities(root, entity_type.iri)
            except StoreError as e:
                raise HTTPException(status_code=400, detail=str(e))
            members = [EntityModel.from_entity(e) for e in entities]
            return collection_response(request, members, len(members))

        try:
            total, entities = entity_manager.get_entities(entity_type.iri, page, size)
        except StoreError as e:
            raise HTTPException(status_code=500, detail=str(e))
        members = [EntityModel.from_entity(e) for e in entities]
        return collection_response(request, members, total, page, size)

    @router.post(path, name=f"create_{name}_entity", status_code=201, responses={
        400: {"description": "The entity could not be added, e.g. its parent does not exist."},
    })
    def create_entity(body: EntityModel) -> JSONResponse:
        """Create an entity and link it to its parent when isPartOf is given."""
        entity = body.to_entity()
        try:
            entity_manager.add_entity(entity)
        except RecError as e:
            logger.error(f"Unable to add entity [{entity.type}]: {e}")
            raise HTTPException(status_code=400, detail=str(e))

        try:
            stored = entity_manager.get_entity(entity.id, entity.type)
        except RecError as e:
            raise HTTPException(status_code=500, detail=str(e))

        model = EntityModel.from_entity(stored)
        return ld_json(model.model_dump(by_alias=True, exclude_none=True), status_code=201)


for _path, _entity_type in ENTITY_COLLECTIONS.items():
    _register(_path, _entity_type)
