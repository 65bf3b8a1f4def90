import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.budget import router as budget_router
from dashboard.api.cooking_sessions import router as cooking_sessions_router
from dashboard.api.event_data import router as event_data_router
from dashboard.api.notification_data import router as notification_data_router
from dashboard.api.notifications import router as notifications_router
from dashboard.api.recipes import router as recipes_router
from dashboard.api.todos import router as todos_router
from dashboard.db.seed import seed_initial_data
from dashboard.db.session import AsyncSessionLocal
from dashboard.db.settings import get_settings
from dashboard.errors import register_error_handlers

settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)


@app.on_event("startup")
async def on_startup() -> None:
    async with AsyncSessionLocal() as session:
        await seed_initial_data(
            session,
            settings.default_user_id,
            seed_demo=settings.seed_demo,
            fanout_months=settings.fanout_months,
        )


@app.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(budget_router)
app.include_router(notification_data_router)
app.include_router(event_data_router)
app.include_router(notifications_router)
app.include_router(todos_router)
app.include_router(recipes_router)
app.include_router(cooking_sessions_router)
