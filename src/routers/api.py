from fastapi import APIRouter

from routers import cloudevents, entities, observations

router = APIRouter()

# include sub-routers
router.include_router(entities.router)
router.include_router(observations.router)
router.include_router(cloudevents.router)
