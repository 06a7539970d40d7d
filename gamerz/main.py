import logging
import os

from fastapi import FastAPI

from gamerz.api.routes import router

app = FastAPI(title="gamerz", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=os.environ.get("GAMERZ_LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "gamerz", "version": "0.1.0"}
