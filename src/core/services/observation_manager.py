import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.db.database import database
from core.db.tables import ObservationRow
from core.errors import StoreError
from core.models.observation import Observation, SensorObservation
from core.processing.dedup import DEDUP_WINDOW, should_persist, window_start

logger = logging.getLogger(__name__)


def _utc(ts: datetime) -> datetime:
    # SQLite hands back naive datetimes, everything is stored as UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _to_observation(row: ObservationRow) -> Observation:
    return Observation(
        sensor_id=row.sensor_id,
        observation_time=_utc(row.observation_time),
        quantity_kind=row.quantity_kind,
        value=row.value,
        value_string=row.value_string,
        value_boolean=row.value_boolean,
    )


class ObservationManager:
    """
    Stores observations and answers time range queries.
    Writes go through the deduplication gate inside one transaction per batch.
    """

    def __init__(self, dedup_window: timedelta = DEDUP_WINDOW):
        self.dedup_window = dedup_window

    def find_last_in_window(
        self,
        session: Session,
        device_id: str,
        sensor_id: str,
        quantity_kind: str,
        not_before: datetime,
    ) -> Optional[Observation]:
        """Latest stored observation for the tuple strictly after `not_before`."""
        stmt = (
            select(ObservationRow)
            .where(
                ObservationRow.device_id == device_id,
                ObservationRow.sensor_id == sensor_id,
                ObservationRow.quantity_kind == quantity_kind,
                ObservationRow.observation_time > _utc(not_before),
            )
            .order_by(ObservationRow.observation_time.desc(), ObservationRow.observation_id.desc())
            .limit(1)
        )
        row = session.scalars(stmt).first()
        return _to_observation(row) if row is not None else None

    def insert(self, session: Session, device_id: str, observation: Observation) -> int:
        """Insert one observation, returns the number of rows written (0 for an exact duplicate)."""
        stmt = database.insert(ObservationRow).values(
            device_id=device_id,
            sensor_id=observation.sensor_id,
            observation_time=_utc(observation.observation_time),
            value=observation.value,
            value_string=observation.value_string,
            value_boolean=observation.value_boolean,
            quantity_kind=observation.quantity_kind,
        )
        if hasattr(stmt, "on_conflict_do_nothing"):
            stmt = stmt.on_conflict_do_nothing()
        result = session.execute(stmt)
        return max(result.rowcount, 0)

    def add_observation(self, sensor_observation: SensorObservation) -> int:
        """
        Store a batch of observations from one device.
        Each observation is compared against the latest one inside the dedup
        window and skipped if nothing changed. Either the whole batch commits
        or nothing does.
        Returns the number of stored observations.
        """
        stored = 0
        try:
            with database.session() as session, session.begin():
                for observation in sensor_observation.observations:
                    last = self.find_last_in_window(
                        session,
                        sensor_observation.device_id,
                        observation.sensor_id,
                        observation.quantity_kind,
                        window_start(observation, self.dedup_window),
                    )
                    if not should_persist(observation, last):
                        logger.debug(
                            f"Skipped duplicate {observation.quantity_kind} from "
                            f"{sensor_observation.device_id}/{observation.sensor_id}"
                        )
                        continue
                    stored += self.insert(session, sensor_observation.device_id, observation)
        except SQLAlchemyError as e:
            logger.error(f"Failed to store observations from {sensor_observation.device_id}: {e}")
            raise StoreError(str(e)) from e

        return stored

    def get_observations(
        self,
        sensor_id: str,
        starting: datetime,
        ending: datetime,
        page: int = 0,
        size: int = 10,
    ) -> Tuple[int, List[Observation]]:
        """Observations for a sensor with starting <= time <= ending, oldest first."""
        where = (
            ObservationRow.sensor_id == sensor_id,
            ObservationRow.observation_time.between(_utc(starting), _utc(ending)),
        )
        try:
            with database.session() as session:
                total = session.scalar(select(func.count()).select_from(ObservationRow).where(*where))
                rows = session.scalars(
                    select(ObservationRow)
                    .where(*where)
                    .order_by(ObservationRow.observation_time.asc(), ObservationRow.observation_id.asc())
                    .offset(page * size)
                    .limit(size)
                ).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load observations for {sensor_id}: {e}")
            raise StoreError(str(e)) from e

        return total or 0, [_to_observation(row) for row in rows]


# Global instance
observation_manager = ObservationManager()
