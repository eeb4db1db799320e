# app/core/config.py
import os
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (the directory holding main.py)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    Application settings, loaded from environment variables and the project's .env file.
    """

    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # --- Application ---
    APP_NAME: str = "Inventory Management API"
    APP_VERSION: str = "1.0.0"
    APP_ENV: str = Field("development", description="development, production or testing")
    API_PREFIX: str = "/api"

    # --- MongoDB ---
    MONGO_URI: str = Field("mongodb://localhost:27017", description="MongoDB connection string")
    MONGO_DB: str = Field("inventory_management", description="Database name")

    # --- Auth ---
    # Empty list disables API key checks (local development)
    API_KEYS: List[str] = Field(default_factory=list, description="Accepted X-API-Key values")

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = Field("inventory_api.log", description="Rotating log file; empty disables file logging")

    # --- Domain IDs / queries ---
    ID_PAD_WIDTH: int = Field(5, ge=1)
    ID_ALLOCATION_RETRIES: int = Field(3, ge=0, description="Re-allocations after a domain ID collision")
    DEFAULT_PAGE_SIZE: int = Field(10, ge=1)
    MAX_PAGE_SIZE: int = Field(100, ge=1)
    SEARCH_RESULT_LIMIT: int = Field(20, ge=1)


settings = Settings()

# Kept as module constants so services can import them directly
MONGO_URI = settings.MONGO_URI
MONGO_DB = settings.MONGO_DB

COLLECTION_SUPPLIERS = "suppliers"
COLLECTION_PRODUCTS = "products"
COLLECTION_CUSTOMERS = "customers"
COLLECTION_WAREHOUSES = "warehouses"
COLLECTION_INVENTORY = "inventory"
COLLECTION_ORDERS = "orders"
COLLECTION_PURCHASES = "purchases"
COLLECTION_TRANSFERS = "inventory_transfers"
COLLECTION_USERS = "users"
