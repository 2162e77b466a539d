import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from routes.catalog import router as catalog_router
from routes.submissions import router as submissions_router
from services.store_service import get_store


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("showcase")


# =========================================
# 🏁 Lifespan (store initialization)
# =========================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    store.initialize()
    logger.info(
        f"✅ Store ready: backend={settings.STORE_BACKEND}, "
        f"seed builds={len(store.seed_records)}, environment={settings.ENVIRONMENT}"
    )
    yield
    logger.info("✅ Application shutting down.")

# =========================================
#  ✅ FastAPI App
# =========================================
app = FastAPI(lifespan=lifespan, title="Showcase Gallery Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================
# ❗ Error bodies: {"error": reason}
# =========================================
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any((err.get("loc") or ("",))[0] == "body" for err in errors):
        message = "Invalid request body"
    else:
        message = "Invalid request parameters"
    logger.warning(f"⚠️ {message} on {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"error": message})


# =========================================
# 📦 Routers
# =========================================
app.include_router(submissions_router, prefix="/submissions", tags=["Submissions"])
app.include_router(catalog_router, prefix="/catalog", tags=["Catalog"])


# =========================================
# 🩺 Health Check
# =========================================
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "Backend is running"}
