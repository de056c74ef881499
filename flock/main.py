import logging

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
)
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from flock.config import get_settings
from flock.errors import register_exception_handlers
from flock.controllers.health import router as health_router
from flock.controllers.availability import router as availability_router

settings = get_settings()

app = FastAPI(title="Flock Availability API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_origin_regex=settings.cors.origins_regex or None,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.debug.availability:
    logging.getLogger("flock.availability").setLevel(logging.DEBUG)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(availability_router)
