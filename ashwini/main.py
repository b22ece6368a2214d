"""
Ashwini Health Assistant - FastAPI Application Entry Point

Registers routers for report analysis, learning, wellness, facility search,
the AI assistant and emergency alerts.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

# Resolve .env relative to project root (parent of ashwini/)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=True)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ashwini.config import settings
from ashwini.routers import analysis, assistant, emergency, facilities, learn, wellness

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Ashwini Health Assistant")

# CORS - allow all origins for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(analysis.router, prefix="/analysis", tags=["analysis"])
app.include_router(learn.router, prefix="/learn", tags=["learn"])
app.include_router(wellness.router, prefix="/wellness", tags=["wellness"])
app.include_router(facilities.router, prefix="/facilities", tags=["facilities"])
app.include_router(assistant.router, prefix="/assistant", tags=["assistant"])
app.include_router(emergency.router, prefix="/emergency", tags=["emergency"])


@app.get("/health")
async def health() -> dict:
    """Report whether the Gemini backend and SMS alerts are configured."""
    from ashwini.core.alert_dispatcher import alert_dispatcher
    from ashwini.core.gemini_client import gemini_client

    return {
        "status": "ok",
        "gemini_available": gemini_client.is_available,
        "alerts_configured": alert_dispatcher.config.is_configured,
    }
