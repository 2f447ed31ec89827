# api/main.py
import logging
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from core.activation import activate
from core.config import configure_logging, get_settings
from core.sa.database import db
from api.routes import admin, books

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Book Manager", version=get_settings().version)

# CORS configuration
origins = [
    "http://localhost:5173",
    "http://localhost:4173",
    "http://localhost",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=Path(__file__).resolve().parent.parent / "core" / "static"), name="static")

app.include_router(admin.router)
app.include_router(books.router)

# Create the schema on startup
@app.on_event("startup")
async def startup_event():
    activate(db)

@app.get("/")
async def root():
    return {"status": "ok", "version": get_settings().version}
