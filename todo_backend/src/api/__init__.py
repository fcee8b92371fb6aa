"""
FastAPI facade for the todo service.

Serve it with the app factory, e.g.:
    uvicorn src.api.main:create_app --factory
or run `python -m src.api.main`, which listens on $PORT.
"""
