"""
Relational schema: the entity hierarchy (entity + relation adjacency list)
and the observations time series.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, Numeric, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements INTEGER PRIMARY KEY columns
BigIntId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    pass


class EntityRow(Base):
    __tablename__ = "entity"
    __table_args__ = (
        Index("entity_entity_type_entity_id_unique_indx", "entity_type", "entity_id", unique=True),
    )

    node_id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    entity_id: Mapped[str] = mapped_column(Text, nullable=False)
    entity_type: Mapped[str] = mapped_column(Text, nullable=False)
    entity_context: Mapped[str] = mapped_column(Text, nullable=False)


class RelationRow(Base):
    __tablename__ = "relation"
    __table_args__ = (
        Index("relation_child_parent_indx", "child", "parent"),
    )

    parent: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    child: Mapped[int] = mapped_column(BigInteger, primary_key=True)


class ObservationRow(Base):
    __tablename__ = "observations"
    __table_args__ = (
        UniqueConstraint(
            "device_id", "sensor_id", "observation_time", "value", "value_string", "value_boolean", "quantity_kind",
            name="observations_unique",
            postgresql_nulls_not_distinct=True,
        ),
        Index("observations_latest_indx", "device_id", "sensor_id", "quantity_kind", "observation_time"),
    )

    observation_id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    device_id: Mapped[str] = mapped_column(Text, nullable=False)
    sensor_id: Mapped[str] = mapped_column(Text, nullable=False)
    observation_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    value: Mapped[Optional[float]] = mapped_column(Numeric(asdecimal=False), nullable=True)
    value_string: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    value_boolean: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    quantity_kind: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<ObservationRow(device_id={self.device_id}, sensor_id={self.sensor_id}, time={self.observation_time})>"
