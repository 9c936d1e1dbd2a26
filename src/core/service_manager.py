# External libs
import logging
import os
from datetime import timedelta

# Internal libs
from core.config_loader import config_loader
from core.db.database import database
from core.services.observation_manager import observation_manager
from core.services.seeder import seed_file

logger = logging.getLogger(__name__)


class ServiceManager:

    def start_services(self, database_url: str, rec_input_file: str, dedup_window_seconds: int):
        """
        Connect to the database, create missing tables and seed the entity
        hierarchy when the REC input file exists.
        """
        logger.info("Starting services...")

        database.init(database_url, config_loader.get_pool_size())
        observation_manager.dedup_window = timedelta(seconds=dedup_window_seconds)

        if rec_input_file and os.path.exists(rec_input_file):
            seed_file(rec_input_file)
        else:
            logger.info(f"No REC input file at {rec_input_file}, skipping seed")

        logger.info("Services started.")

    def stop_services(self):
        """Release pooled database connections."""
        database.dispose()
        logger.info("Services stopped.")


service_manager = ServiceManager()
