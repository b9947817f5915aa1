import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import text

from config.settings import app_settings
from src.core.logging_config import setup_logging
from src.db.session import db_session
from src.routers import readiness as readiness_router

# Configure logging VERY early
setup_logging(app_settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="AI Readiness Check - API")

origins = [origin.strip() for origin in app_settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include Routers ---
app.include_router(readiness_router.router, prefix="/api/v1", tags=["readiness"])
app.include_router(readiness_router.redirect_router, tags=["short links"])


@app.get("/health", tags=["Health Check"])
async def health():
    return {"status": "ok"}


@app.get("/health/db", tags=["Health Check"])
async def health_check_db(db: AsyncSession = Depends(db_session)):
    """
    Performs a database connection health check.
    """
    try:
        result = (await db.execute(text("SELECT 1"))).scalar_one()
        return {"status": "ok", "db_check": result}
    except Exception as e:
        logger.error(f"DB health check failed: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail=f"Database connection error: {e}")


if __name__ == "__main__":
    import uvicorn
    # Better to run with `uvicorn main:app --reload` from the project root directory
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
