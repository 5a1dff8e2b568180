"""Main application entry point for the beverage menu service.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os
from typing import Any

import boto3
from fastapi import FastAPI

from beverage_menu_service.handlers.api_handler import create_app
from beverage_menu_service.observability import configure_logging, setup_observability
from beverage_menu_service.repositories.key_value_store import (
    DynamoDBKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
)
from beverage_menu_service.repositories.offline_cache_repository import OfflineCacheRepository
from beverage_menu_service.repositories.wishlist_repository import WishlistRepository
from beverage_menu_service.services.beverage_source_client import BeverageSourceClient
from beverage_menu_service.services.connectivity import ConnectivityMonitor
from beverage_menu_service.services.cuisine_matcher import CuisineMatcher
from beverage_menu_service.services.menu_service import MenuService
from beverage_menu_service.services.offline_cache_service import OfflineCacheService
from beverage_menu_service.services.wishlist_service import WishlistService

logger = logging.getLogger(__name__)


def get_dynamodb_resource() -> Any:
    """Create DynamoDB resource with appropriate configuration.

    Returns:
        Boto3 DynamoDB resource configured for environment
    """
    # Check for local DynamoDB endpoint (for development)
    endpoint_url = os.getenv("DYNAMODB_ENDPOINT")
    region = os.getenv("AWS_REGION", "us-east-1")

    if endpoint_url:
        # Local DynamoDB - use environment variables or defaults for credentials
        access_key = os.getenv("AWS_ACCESS_KEY_ID", "dummy")
        secret_key = os.getenv("AWS_SECRET_ACCESS_KEY", "dummy")
        logger.info(f"Using local DynamoDB at {endpoint_url}")
        return boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )
    else:
        logger.info(f"Using AWS DynamoDB in region {region}")
        return boto3.resource("dynamodb", region_name=region)


def create_key_value_store() -> KeyValueStore:
    """Create the key-value store selected by STORAGE_BACKEND.

    Returns:
        DynamoDB-backed store by default, in-memory store for "memory"

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = os.getenv("STORAGE_BACKEND", "dynamodb").lower()

    if backend == "memory":
        logger.warning("Using in-memory storage - cached menus and wishlist will not survive a restart")
        return InMemoryKeyValueStore()

    if backend != "dynamodb":
        raise ValueError(f"Unknown STORAGE_BACKEND '{backend}', expected 'dynamodb' or 'memory'")

    table_name = os.getenv("DYNAMODB_CACHE_TABLE", "beverage-menu-local-state")
    logger.info(f"Key-value store configured - table: {table_name}")
    return DynamoDBKeyValueStore(dynamodb_resource=get_dynamodb_resource(), table_name=table_name)


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing beverage menu service...")

    store = create_key_value_store()

    backend_url = os.getenv("BEVERAGE_BACKEND_URL")
    backend_api_key = os.getenv("BEVERAGE_BACKEND_API_KEY")

    if not backend_url or not backend_api_key:
        raise ValueError("BEVERAGE_BACKEND_URL and BEVERAGE_BACKEND_API_KEY must be set in environment")

    source_client = BeverageSourceClient(base_url=backend_url, api_key=backend_api_key)
    logger.info(f"Beverage backend client configured - URL: {backend_url}")

    strict_unknown_cuisine = os.getenv("STRICT_UNKNOWN_CUISINE", "false").lower() == "true"

    connectivity = ConnectivityMonitor()
    offline_cache_service = OfflineCacheService(repository=OfflineCacheRepository(store))
    wishlist_service = WishlistService(repository=WishlistRepository(store))
    menu_service = MenuService(
        source_client=source_client,
        offline_cache_service=offline_cache_service,
        connectivity=connectivity,
        cuisine_matcher=CuisineMatcher(strict_unknown_cuisine=strict_unknown_cuisine),
    )

    logger.info("Services initialized")

    app = create_app(
        menu_service=menu_service,
        offline_cache_service=offline_cache_service,
        wishlist_service=wishlist_service,
        connectivity=connectivity,
    )

    setup_observability(app)

    logger.info("Beverage menu service initialized successfully")

    return app


# Create the FastAPI application instance (only when not in test mode)
# This prevents the app from being created during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    # Create a placeholder app for test imports
    app = FastAPI()


if __name__ == "__main__":
    """Run the application with uvicorn when executed directly."""
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")
    logger.info(f"API documentation available at http://{host}:{port}/docs")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
