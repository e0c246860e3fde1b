from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.database import engine
from app.routers import auth, files, status, users
from app.models import models
from app.utils.errors import FilesManagerError
import logging
from fastapi.middleware.cors import CORSMiddleware

logging.getLogger('passlib').setLevel(logging.ERROR)

logger = logging.getLogger(__name__)


app = FastAPI(title="files-manager")
origins = [
    "http://localhost",
    "http://localhost:8080",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)



models.Base.metadata.create_all(engine)


@app.exception_handler(FilesManagerError)
async def files_manager_error_handler(request: Request, exc: FilesManagerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


app.include_router(status.router)
app.include_router(users.router)
app.include_router(auth.router)
app.include_router(files.router)
