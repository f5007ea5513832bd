import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    MONGO_URI: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DATABASE: str = os.getenv("MONGO_DATABASE", "mms")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # Arrays longer than this are reported as candidates for their own collection
    ARRAY_GROWTH_THRESHOLD: int = int(os.getenv("ARRAY_GROWTH_THRESHOLD", "10"))
    VALIDATION_WORKERS: int = int(os.getenv("VALIDATION_WORKERS", "1"))


settings = Settings()
