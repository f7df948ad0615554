import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "settings.server:taskflow_app",
        host="0.0.0.0",
        port=7071,
        timeout_keep_alive=600,
        timeout_graceful_shutdown=300,
        reload=False
    )
