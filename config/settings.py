"""
Configuration settings for StudyCards application
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Base paths
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", str(BASE_DIR / "data")))
LOGS_DIR = Path(os.getenv("LOGS_DIR", str(BASE_DIR / "logs")))

# Create directories if they don't exist
for dir_path in [DATA_DIR, LOGS_DIR]:
    dir_path.mkdir(parents=True, exist_ok=True)

# API Configuration
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", 8000))
API_VERSION = os.getenv("API_VERSION", "v1")
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# CORS
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")

# Storage
# Backend: file (one JSON file per key), diskcache, memory
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
STORAGE_PATH = Path(os.getenv("STORAGE_PATH", str(DATA_DIR / "storage")))

# Quiz Settings
QUIZ_MIN_CARDS = int(os.getenv("QUIZ_MIN_CARDS", 4))
QUIZ_MAX_QUESTIONS = int(os.getenv("QUIZ_MAX_QUESTIONS", 5))
QUIZ_MAX_DISTRACTORS = int(os.getenv("QUIZ_MAX_DISTRACTORS", 3))
QUIZ_TIME_LIMIT = int(os.getenv("QUIZ_TIME_LIMIT", 30))  # seconds per question

# Optional fixed seed for question shuffling (unset = system entropy)
RANDOM_SEED = int(os.environ["RANDOM_SEED"]) if os.getenv("RANDOM_SEED") else None

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = Path(os.getenv("LOG_FILE", str(LOGS_DIR / "studycards.log")))
