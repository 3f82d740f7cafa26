from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from reliefmap.api.routers import mapfeatures, offers, requests, zones
from reliefmap.core.config import get_settings
from reliefmap.core.logging import setup_logging
from reliefmap.db import init_db

settings = get_settings()
setup_logging(settings.LOG_LEVEL)

app = FastAPI(title=settings.APP_NAME, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/health")
def health():
    return {"ok": True}


# create tables on first start
@app.on_event("startup")
def on_startup():
    init_db()

app.include_router(requests.router, prefix="/requests", tags=["requests"])
app.include_router(offers.router,   prefix="/offers",   tags=["offers"])
app.include_router(zones.router,    prefix="/zones",    tags=["zones"])
app.include_router(mapfeatures.router, prefix="/map",    tags=["map"])

# stored photos are served from /data
settings.DATA_DIR.mkdir(parents=True, exist_ok=True)
app.mount(settings.PUBLIC_DATA_URL, StaticFiles(directory=str(settings.DATA_DIR)), name="data")
