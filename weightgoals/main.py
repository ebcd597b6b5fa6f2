from fastapi import FastAPI

from weightgoals.config import settings
from weightgoals.engine.router import router as goals_router
from weightgoals.logger import setup_logger

setup_logger(settings)

app = FastAPI(title="WeightGoals", version="0.1.0")
app.include_router(goals_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "goals": {
            "defaults": "/goals/defaults",
            "snapshot": "/goals/snapshot",
            "weekly": "/goals/weekly",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
