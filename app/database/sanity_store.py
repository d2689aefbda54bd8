from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import uuid4
import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)

class OrderStoreError(Exception):
    """Raised when the document store rejects or fails an order write"""

class OrderStoreConfigError(OrderStoreError):
    """Raised when the store is missing its connection settings"""

class OrderStore(ABC):
    """Document store that persists order documents.

    create_order is a single atomic write; it either returns the id of the
    new document or raises, never leaving a partial order behind.
    """

    name = "abstract"

    async def init_client(self):
        pass

    @abstractmethod
    async def create_order(self, document: Dict[str, Any]) -> str:
        ...

    async def close(self):
        pass

class SanityStore(OrderStore):
    name = "sanity"

    def __init__(
        self,
        project_id: Optional[str] = None,
        dataset: Optional[str] = None,
        token: Optional[str] = None,
        api_version: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.project_id = project_id or settings.SANITY_PROJECT_ID
        self.dataset = dataset or settings.SANITY_DATASET
        self.token = token or settings.SANITY_AUTH_TOKEN
        self.api_version = api_version or settings.SANITY_API_VERSION
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None

    @property
    def mutate_url(self) -> str:
        return (
            f"https://{self.project_id}.api.sanity.io"
            f"/v{self.api_version}/data/mutate/{self.dataset}"
        )

    async def init_client(self):
        """Open the HTTP client used for mutations"""
        if not self.project_id or not self.token:
            logger.error("[Sanity] Missing project id or auth token")
            raise OrderStoreConfigError(
                "SANITY_PROJECT_ID and SANITY_AUTH_TOKEN must be set"
            )
        self.client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json",
            },
            timeout=settings.SANITY_TIMEOUT,
            transport=self.transport,
        )
        logger.info(f"[Sanity] Client ready for {self.project_id}/{self.dataset}")

    async def create_order(self, document: Dict[str, Any]) -> str:
        """Create one document and return its id"""
        if self.client is None:
            await self.init_client()

        body = {"mutations": [{"create": document}]}
        response = await self.client.post(
            self.mutate_url, params={"returnIds": "true"}, json=body
        )

        if response.is_error:
            raise OrderStoreError(self._error_description(response))

        results = response.json().get("results") or []
        if not results or not results[0].get("id"):
            raise OrderStoreError("Document store returned no document id")

        document_id = results[0]["id"]
        logger.info(f"[Sanity] Created {document.get('_type')} {document_id}")
        return document_id

    @staticmethod
    def _error_description(response: httpx.Response) -> str:
        try:
            error = response.json().get("error")
        except ValueError:
            error = None
        if isinstance(error, dict):
            error = error.get("description") or error.get("type")
        return error or f"Document store responded with HTTP {response.status_code}"

    async def close(self):
        """Close the HTTP client"""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.info("[Sanity] Client closed")

class InMemoryOrderStore(OrderStore):
    """Dict-backed store for local runs and tests."""

    name = "memory"

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.should_fail = False
        self.failure_reason = "Document store unavailable"

    def configure(self, should_fail: bool = False, failure_reason: str = "Document store unavailable"):
        """Simulate an outage on subsequent writes"""
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    async def create_order(self, document: Dict[str, Any]) -> str:
        if self.should_fail:
            raise OrderStoreError(self.failure_reason)
        document_id = uuid4().hex
        self.documents[document_id] = {**document, "_id": document_id}
        logger.info(f"[Memory] Created {document.get('_type')} {document_id}")
        return document_id

# Global instance
_order_store: Optional[OrderStore] = None

def get_order_store() -> OrderStore:
    """Return the configured order store (singleton)"""
    global _order_store
    if _order_store is None:
        backend = settings.ORDER_STORE.lower()
        if backend == "sanity":
            _order_store = SanityStore()
        elif backend == "memory":
            _order_store = InMemoryOrderStore()
        else:
            raise OrderStoreConfigError(f"Unknown order store: {settings.ORDER_STORE}")
    return _order_store

def reset_order_store():
    global _order_store
    _order_store = None
