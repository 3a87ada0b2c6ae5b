from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from catalog import router as catalog_router
from core import db, settings
from core.logging_config import configure_logging
from dashboard import router as dashboard_router
from donations import router as donations_router
from expenses import router as expenses_router
from programs import router as programs_router
from team import router as team_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="charity-society-api", lifespan=lifespan)

# Allow the site front end to call this API from the browser.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router, tags=["auth"])
app.include_router(programs_router.router, tags=["programs"])
app.include_router(catalog_router.router, tags=["catalog"])
app.include_router(donations_router.router, tags=["donations"])
app.include_router(expenses_router.router, tags=["expenses"])
app.include_router(team_router.router, tags=["team"])

app.include_router(dashboard_router.admin_router, tags=["admin"])
app.include_router(programs_router.admin_router, tags=["admin"])
app.include_router(catalog_router.admin_router, tags=["admin"])
app.include_router(donations_router.admin_router, tags=["admin"])
app.include_router(expenses_router.admin_router, tags=["admin"])
app.include_router(team_router.admin_router, tags=["admin"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "charity-society api"}
