import logging
import os

from fastapi import FastAPI

from .api import health, report

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format=LOG_FORMAT,
    datefmt=LOG_DATE_FORMAT,
)

app = FastAPI(title="NiFi NRDP Reporter")

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(report.router, prefix="/report", tags=["report"])
