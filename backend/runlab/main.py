from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from runlab.api.athlete import router as athlete_router
from runlab.api.plans import router as plans_router
from runlab.api.runs import router as runs_router
from runlab.db import Base, engine
from runlab.models.run import Run  # noqa: F401  (import ensures table is registered)
from runlab.models.athlete import AthleteProfile, CompletedSession  # noqa: F401
from runlab.core.config import settings
from runlab.core.logging import setup_logging


setup_logging(settings.log_level)

app = FastAPI()

# Allow CORS for local frontend
origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables (runs, athlete settings, completed sessions) on startup
Base.metadata.create_all(bind=engine)

app.include_router(runs_router)
app.include_router(athlete_router)
app.include_router(plans_router)


@app.get("/")
def root():
    return {"message": "Runlab backend is running"}
