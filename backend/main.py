from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import cors_origins, log_level, trace_enabled
from server.api import router as charts_router
import logging

logger = logging.getLogger("uvicorn.error")
logger.setLevel(log_level())

# fail at boot on a malformed CHART_TRACE
trace_enabled()

app = FastAPI(title="Chart Engine", description="Turn spreadsheet rows into chart-ready data")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount the chart API router
app.include_router(charts_router)


@app.get("/health")
async def health():
    return {"ok": True}
