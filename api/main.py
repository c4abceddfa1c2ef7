from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import blobstore, db
from core.config import get_settings
from core.observability import setup_logging
from error_handlers import register_error_handlers
from storage import router as storage_router
from storage.service import ObjectFetchService
from users import router as users_router
from users.service import UserLookupService

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    # One pool and one blob client per process, shared by all requests.
    client = blobstore.create_client(settings)
    pool = None
    try:
        pool = await db.create_pool(settings)
        app.state.user_service = UserLookupService(pool)
        app.state.object_service = ObjectFetchService(client)
        yield
    finally:
        await client.aclose()
        await db.close_pool(pool)


app = FastAPI(lifespan=lifespan)

# Allow local frontend dev server to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(users_router.router, tags=["users"])
app.include_router(storage_router.router, tags=["storage"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "user/object lookup gateway"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
