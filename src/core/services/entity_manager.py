import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.db.database import database
from core.db.tables import EntityRow, RelationRow
from core.errors import EntityNotFoundError, StoreError
from core.models.entity import Entity, Property

logger = logging.getLogger(__name__)


class EntityManager:
    """
    Stores the space -> building -> sensor hierarchy.
    Entities live in one table, parent/child links in an adjacency list.
    """

    def _node_id(self, session: Session, entity_id: str, entity_type: str) -> int:
        node_id = session.scalar(
            select(EntityRow.node_id).where(EntityRow.entity_id == entity_id, EntityRow.entity_type == entity_type)
        )
        if node_id is None:
            raise EntityNotFoundError(entity_id, entity_type)
        return node_id

    def _parent(self, session: Session, node_id: int) -> Optional[Property]:
        row = session.execute(
            select(EntityRow.entity_id, EntityRow.entity_type)
            .join(RelationRow, RelationRow.parent == EntityRow.node_id)
            .where(RelationRow.child == node_id)
            .limit(1)
        ).first()
        if row is None:
            return None
        return Property(id=row.entity_id, type=row.entity_type)

    def _to_entity(self, session: Session, row: EntityRow) -> Entity:
        return Entity(
            context=row.entity_context,
            id=row.entity_id,
            type=row.entity_type,
            is_part_of=self._parent(session, row.node_id),
        )

    def add_entity(self, entity: Entity) -> None:
        """
        Insert an entity, existing entities are left untouched.
        When is_part_of is set the parent must already exist.
        """
        try:
            with database.session() as session, session.begin():
                stmt = database.insert(EntityRow).values(
                    entity_id=entity.id,
                    entity_type=entity.type,
                    entity_context=entity.context,
                )
                if hasattr(stmt, "on_conflict_do_nothing"):
                    stmt = stmt.on_conflict_do_nothing()
                session.execute(stmt)

                if entity.is_part_of is None:
                    return

                child = self._node_id(session, entity.id, entity.type)
                parent = self._node_id(session, entity.is_part_of.id, entity.is_part_of.type)

                relation = database.insert(RelationRow).values(parent=parent, child=child)
                if hasattr(relation, "on_conflict_do_nothing"):
                    relation = relation.on_conflict_do_nothing()
                session.execute(relation)
        except SQLAlchemyError as e:
            logger.error(f"Failed to add entity {entity.id} [{entity.type}]: {e}")
            raise StoreError(str(e)) from e

    def get_entity(self, entity_id: str, entity_type: str) -> Entity:
        try:
            with database.session() as session:
                row = session.scalars(
                    select(EntityRow).where(EntityRow.entity_id == entity_id, EntityRow.entity_type == entity_type)
                ).first()
                if row is None:
                    raise EntityNotFoundError(entity_id, entity_type)
                return self._to_entity(session, row)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def get_entities(self, entity_type: str, page: int = 0, size: int = 10) -> Tuple[int, List[Entity]]:
        """One page of entities of a type ordered by id, together with the total count."""
        try:
            with database.session() as session:
                total = session.scalar(
                    select(func.count()).select_from(EntityRow).where(EntityRow.entity_type == entity_type)
                )
                rows = session.scalars(
                    select(EntityRow)
                    .where(EntityRow.entity_type == entity_type)
                    .order_by(EntityRow.entity_id.asc())
                    .offset(page * size)
                    .limit(size)
                ).all()
                return total or 0, [self._to_entity(session, row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load entities of type {entity_type}: {e}")
            raise StoreError(str(e)) from e

    def get_child_entities(self, root: Entity, entity_type: str) -> List[Entity]:
        """All descendants of `root` with the given type, walking the relation table recursively."""
        traverse = (
            select(EntityRow.node_id, EntityRow.entity_type, EntityRow.entity_id)
            .where(EntityRow.entity_id == root.id, EntityRow.entity_type == root.type)
            .cte("traverse", recursive=True)
        )
        traverse = traverse.union_all(
            select(EntityRow.node_id, EntityRow.entity_type, EntityRow.entity_id)
            .select_from(traverse)
            .join(RelationRow, traverse.c.node_id == RelationRow.parent)
            .join(EntityRow, RelationRow.child == EntityRow.node_id)
        )
        stmt = (
            select(traverse.c.entity_id)
            .where(traverse.c.entity_type == entity_type)
            .group_by(traverse.c.entity_id)
            .order_by(traverse.c.entity_id.asc())
        )

        try:
            with database.session() as session:
                entities = []
                for entity_id in session.scalars(stmt).all():
                    row = session.scalars(
                        select(EntityRow).where(EntityRow.entity_id == entity_id, EntityRow.entity_type == entity_type)
                    ).one()
                    entities.append(self._to_entity(session, row))
                return entities
        except SQLAlchemyError as e:
            logger.error(f"Failed to load {entity_type} below {root.id}: {e}")
            raise StoreError(str(e)) from e


# Global instance
entity_manager = EntityManager()
