from fastapi import FastAPI

from reqcheck.api.health import router as health_router
from reqcheck.api.root import router as root_router
from reqcheck.api.preview import router as preview_router

app = FastAPI(title="reqcheck")

app.include_router(root_router)
app.include_router(health_router)
app.include_router(preview_router)
