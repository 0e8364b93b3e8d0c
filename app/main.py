from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.routes_home import router as home_router
from app.routes_events import router as events_router
from core.state_owner import HomeStateOwner
from data.repo import HomeRepo
from utils.logging import configure_logging

@asynccontextmanager
async def lifespan(app: FastAPI):
    owner = HomeStateOwner(app.state.repo)
    owner.start()
    app.state.owner = owner
    try:
        yield
    finally:
        await owner.stop()

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="WizardOfHome", version="0.1.0", lifespan=lifespan)
    app.state.repo = HomeRepo()
    app.include_router(home_router, tags=["home"])
    app.include_router(events_router, prefix="/events", tags=["events"])
    return app

app = create_app()
