"""
FastAPI application for StudyCards
"""
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studycards import __version__
from studycards.api.study_routes import router as study_router
from studycards.utils.logger import get_logger
from studycards.utils.study_controller import get_study_controller
from config import settings

logger = get_logger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="StudyCards API",
    description="Flashcard study and quiz API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include study routes
app.include_router(study_router)


@app.on_event("startup")
async def startup_event():
    """Load the card collection on startup"""
    logger.info("Starting StudyCards API...")
    logger.info(f"API running on {settings.API_HOST}:{settings.API_PORT}")
    controller = get_study_controller()
    logger.info(f"Using {settings.STORAGE_BACKEND} storage with {len(controller.store.cards)} cards")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop running timers on shutdown"""
    logger.info("Shutting down StudyCards API...")
    get_study_controller().back_to_menu()


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint"""
    return {
        "message": "Welcome to StudyCards API",
        "version": __version__,
        "docs": "/docs"
    }


@app.get(f"/api/{settings.API_VERSION}/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(),
        "version": __version__
    }


def main():
    """Run the API with uvicorn"""
    import uvicorn

    uvicorn.run(
        "studycards.api.app:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG_MODE
    )


if __name__ == "__main__":
    main()
