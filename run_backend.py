#!/usr/bin/env python
"""Script to run the Task Prioritization API server."""
import uvicorn

from task_api.config import APP_ENV, HOST, PORT

if __name__ == "__main__":
    uvicorn.run(
        "task_api.main:app",
        host=HOST,
        port=PORT,
        reload=APP_ENV == "development",
    )
