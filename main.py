from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv())  # carga .env antes de tocar settings

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gitwrapped.core.config import settings
from gitwrapped.routers import health, summary, contributions, network, repositories, stats

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("gitwrapped")

app = FastAPI(title="Git Wrapped API")


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Errores con el formato que espera el frontend: {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request", "detail": jsonable_errors(exc)})

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)},
    )

def jsonable_errors(exc: RequestValidationError) -> list:
    return [{"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()]

app.include_router(health.router)
app.include_router(summary.router, prefix="", tags=["summary"])
app.include_router(contributions.router, prefix="", tags=["contributions"])
app.include_router(network.router, prefix="", tags=["network"])
app.include_router(repositories.router, prefix="", tags=["repositories"])
app.include_router(stats.router, prefix="", tags=["stats"])

# uvicorn main:app --reload --port 8080
