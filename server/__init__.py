"""FastAPI application serving the vehicle catalog."""
