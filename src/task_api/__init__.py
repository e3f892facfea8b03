"""
FastAPI Task Manager API package.

The application instance lives in `task_api.main:app`.
"""
