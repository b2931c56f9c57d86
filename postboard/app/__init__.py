"""FastAPI application: factory, lifespan, routing and exception handlers."""
