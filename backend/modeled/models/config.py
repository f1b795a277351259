"""Configuration models"""

from pydantic import BaseModel
from typing import Optional


class AppConfig(BaseModel):
    """Application configuration"""
    host: str = "0.0.0.0"
    port: int = 6741
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/app.log"


class StorageConfig(BaseModel):
    """Catalog file storage"""
    models_file: str = "models.json"
    indent: int = 2


class EditorConfig(BaseModel):
    """Editor session configuration"""
    backend_url: str = "http://127.0.0.1:6741"
    load_path: str = "/api/models"
    save_path: str = "/api/models/save"
    notification_seconds: int = 5
    request_timeout: Optional[float] = 10.0
