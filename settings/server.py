from fastapi import FastAPI, HTTPException
from settings.service_tracer import initialize_tracer
from settings.datadog_logger import DatadogLogger
from fastapi.responses import JSONResponse
from fastapi.middleware.gzip import GZipMiddleware
from datetime import datetime, UTC
import logging
from api.workload import workload_router
from middleware.cors_middleware import add_cors_middleware
from middleware.request_logging_middleware import RequestLoggingMiddleware

description = """
#### Taskflow APIs:
   Projects, teams, tasks and workload rebalancing.
"""

taskflow_app = FastAPI(
    title="Taskflow",
    description=description,
    version="1.0.0",
    root_path="/api",
    docs_url="/docs/taskflow",
)


@taskflow_app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": "failure",
            "data": None,
            "errors": [exc.detail]
        }
    )

add_cors_middleware(taskflow_app)
taskflow_app.add_middleware(GZipMiddleware, minimum_size=1000)
# Structured HTTP request logging
taskflow_app.add_middleware(RequestLoggingMiddleware)

taskflow_app.include_router(workload_router)

@taskflow_app.get('/')
def read_root():
    """
    Root endpoint to check if the Taskflow API is running.
    """
    return {"message": "Taskflow API is running successfully!"}

@taskflow_app.get('/health')
def health_check():
    """
    Lightweight health check endpoint for Kubernetes probes.
    """
    return {"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}


service_name = "Taskflow"

initialize_tracer(service_name, taskflow_app)

# Setup Datadog logger (attach to ROOT logger and uvicorn.access)
dd_handler = DatadogLogger(service=service_name)
dd_handler.setLevel(logging.INFO)

root_logger = logging.getLogger()
root_logger.setLevel(logging.INFO)
if not any(isinstance(h, DatadogLogger) for h in root_logger.handlers):
    root_logger.addHandler(dd_handler)

# Ensure uvicorn.access logs propagate to root logger (no direct handler)
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.setLevel(logging.INFO)
uvicorn_access_logger.propagate = True

root_logger.info("Datadog root logger initialized")
