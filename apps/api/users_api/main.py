from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os

from users_api.infrastructure.db import connection as db
from users_api.infrastructure.db import user_repository
from users_api.infrastructure.db.gateway import StorageGateway
from users_api.interfaces.api.routers import users

API_PREFIX = os.environ.get("API_PREFIX", "").rstrip("/")


@asynccontextmanager
async def lifespan(_: FastAPI):
    db.init_pool()
    user_repository.ensure_table(StorageGateway(db.get_pool()))
    try:
        yield
    finally:
        db.close_pool()


app = FastAPI(title="Users API", version="0.1.0", lifespan=lifespan)

frontend_origin = os.environ.get("FRONTEND_ORIGIN", "http://localhost:3000")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


app.include_router(users.router, prefix=API_PREFIX)
