from pydantic_settings import BaseSettings
from pathlib import Path

# Get the project root directory (parent of planner folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'study_planner.db'}"
    
    # Study day clock window (24h)
    day_start_hour: int = 9
    day_end_hour: int = 21
    
    # Loop safety bounds for the session packer
    max_day_iterations: int = 1000
    max_session_iterations: int = 100
    
    # Used when a topic has no usable hours
    default_difficulty: str = "intermediate"
    
    # Logging
    log_level: str = "INFO"
    log_path: str = str(PROJECT_ROOT / "logs" / "planner.log")
    
    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        extra = "ignore"

settings = Settings()
