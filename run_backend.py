#!/usr/bin/env python
"""Script to run the task tracker API server."""
import uvicorn

from task_tracker.config import HOST, LOG_LEVEL, PORT, RELOAD

if __name__ == "__main__":
    uvicorn.run(
        "task_tracker.main:app",
        host=HOST,
        port=PORT,
        reload=RELOAD,
        log_level=LOG_LEVEL.lower(),
    )
