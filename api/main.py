# api/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from core.exceptions import BlockedByInvariant, NotFoundError, ValidationError, StorageError
from core.sa.database import get_database
from api.routes import books, authors, publishers, series, library

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize database on startup
    get_database().init_db()
    yield

app = FastAPI(title="Home Library", lifespan=lifespan)

# CORS configuration
origins = [
    "http://localhost:5173",        # Local Vite dev server
    "http://localhost:4173",        # Local Vite preview server
    "http://localhost",             # Local production URL
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

@app.exception_handler(BlockedByInvariant)
async def blocked_handler(request: Request, exc: BlockedByInvariant):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": exc.message,
            "message": exc.message,
            "linked_count": exc.linked_count,
            "violations": [violation.model_dump(mode="json") for violation in exc.violations],
        }
    )

@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "errors": exc.errors}
    )

@app.exception_handler(StorageError)
async def storage_handler(request: Request, exc: StorageError):
    logger.error(f"Request {request.method} {request.url.path} failed: {str(exc)}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": "Storage failure, nothing was changed"})

@app.get("/")
async def root():
    return {"message": "Home Library API"}

app.include_router(books.router)
app.include_router(authors.router)
app.include_router(publishers.router)
app.include_router(series.router)
app.include_router(library.router)
