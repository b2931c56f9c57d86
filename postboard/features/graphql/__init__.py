"""GraphQL API (Strawberry) mounted on the FastAPI application."""
