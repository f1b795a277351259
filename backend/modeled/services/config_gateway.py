"""HTTP gateway between the editor session and the catalog endpoints"""

from typing import Optional

import httpx

from modeled.models.catalog import Configuration
from modeled.models.config import EditorConfig
from modeled.services.errors import GatewayError
from modeled.utils.logger import get_logger

logger = get_logger()


class ConfigGateway:
    """Loads and saves the whole catalog document. No retries, no queueing."""

    def __init__(
        self,
        base_url: str,
        load_path: str = "/api/models",
        save_path: str = "/api/models/save",
        timeout: Optional[float] = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url
        self.load_path = load_path
        self.save_path = save_path
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_config(cls, config: EditorConfig) -> "ConfigGateway":
        return cls(
            base_url=config.backend_url,
            load_path=config.load_path,
            save_path=config.save_path,
            timeout=config.request_timeout
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport
        )

    async def load(self) -> Configuration:
        """Fetch the catalog document"""
        try:
            async with self._client() as client:
                response = await client.get(self.load_path)
        except httpx.HTTPError as e:
            raise GatewayError(_describe(e)) from e

        if not response.is_success:
            raise GatewayError(
                f"Failed to load configuration (HTTP {response.status_code})",
                status_code=response.status_code
            )

        try:
            config = Configuration.model_validate(response.json())
        except ValueError as e:
            raise GatewayError(f"Invalid configuration document: {e}") from e

        logger.info(f"Loaded catalog with {len(config.model_list())} models from {self.base_url}")
        return config

    async def save(self, config: Configuration) -> None:
        """Submit the whole catalog document"""
        document = config.to_document()

        try:
            async with self._client() as client:
                response = await client.post(self.save_path, json=document)
        except httpx.HTTPError as e:
            raise GatewayError(_describe(e)) from e

        if not response.is_success:
            # Backend errors are plain text meant for the user
            message = response.text.strip() or f"HTTP {response.status_code}"
            raise GatewayError(message, status_code=response.status_code)

        logger.info(f"Saved catalog with {len(config.model_list())} models to {self.base_url}")

    async def health_check(self) -> bool:
        """Check that the load endpoint answers"""
        try:
            await self.load()
            return True
        except GatewayError as e:
            logger.error(f"Catalog backend health check failed: {e}")
            return False


def _describe(error: Exception) -> str:
    return str(error) or error.__class__.__name__
