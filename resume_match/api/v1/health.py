from fastapi import APIRouter

from resume_match import __version__
from resume_match.ai.config import load_ai_config

router = APIRouter()


@router.get("/health", summary="Health Check", description="Service status and the active AI mode.")
async def health_check():
    try:
        ai_mode = load_ai_config().mode
    except ValueError:
        return {"status": "degraded", "ai_mode": "invalid", "version": __version__}
    return {"status": "healthy", "ai_mode": ai_mode, "version": __version__}
