"""HTTP surface: FastAPI app, routes and schemas."""
