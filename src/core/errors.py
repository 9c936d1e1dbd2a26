class RecError(Exception):
    """Base error for the api-rec service."""


class EntityNotFoundError(RecError):
    def __init__(self, entity_id: str, entity_type: str):
        super().__init__(f"Entity {entity_id} of type {entity_type} not found")
        self.entity_id = entity_id
        self.entity_type = entity_type


class StoreError(RecError):
    """Raised when the database rejects or fails an operation."""
