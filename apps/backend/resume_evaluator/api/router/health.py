from fastapi import APIRouter

health_check = APIRouter()


@health_check.get("/health", tags=["Health check"])
async def ping():
    """
    health check endpoint
    """
    return {"status": "ok"}
