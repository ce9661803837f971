"""FastAPI application entry point."""
import logging

from fastapi import FastAPI

from court_diagrams.api import court, diagrams
from court_diagrams.core.config import ensure_directories

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Ensure directories exist
ensure_directories()

# Initialize FastAPI app
app = FastAPI(
    title="Court Diagrams",
    description="Renders tactical diagrams over the volleyball court background",
    version="1.0.0"
)

# Include API routers
app.include_router(diagrams.router, prefix="/api/diagrams", tags=["Diagrams"])
app.include_router(court.router, prefix="/api/court", tags=["Court"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
