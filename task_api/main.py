from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL
from .database import check_connection, create_tables
from .errors import TaskStorageError, task_storage_error_handler, unhandled_error_handler
from .logging_setup import setup_logging
from .routers import tasks

# Create FastAPI app
app = FastAPI(
    title="Task Prioritization API",
    description="Task CRUD API with priorities derived from completion, criticality and due date",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TaskStorageError, task_storage_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

# Include routers
app.include_router(tasks.router, tags=["tasks"])

# Check the database and create tables on startup
@app.on_event("startup")
def on_startup():
    setup_logging(LOG_LEVEL)
    check_connection()
    create_tables()

@app.get("/")
def read_root():
    return {"message": "Welcome to Task Prioritization API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}
