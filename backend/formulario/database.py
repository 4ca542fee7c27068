"""
Formulario Backend — MongoDB Connection Management
====================================================

What:  The process-wide MongoDB client handle and its FastAPI dependency.
Why:   Centralizes all database connection logic in one place. The handle is
       an explicit object stored on app.state and injected into routes, so
       tests can substitute a fake store without touching globals.
How:   MongoConnection opens one AsyncMongoClient in a background task at
       startup, logs the outcome, and hands out the collection afterwards.
Who:   Created by the lifespan handler; used by SubmissionService through
       the get_connection dependency.
When:  Connected once at startup, closed once at shutdown.

Connection Lifecycle:
    disconnected ──start()──▶ connecting ──ping ok──▶ connected
                                   │
                                   └──ping error──▶ failed (logged, never retried)

    The server does not wait for this: requests can arrive while the state is
    still "connecting". Those requests wait for the pending attempt (the same
    buffering a document mapper does) and then either proceed or fail.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from formulario.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Owns the single long-lived connection to the document store.

    Attributes:
        url:              MongoDB connection string
        database_name:    Logical database holding the submissions
        collection_name:  Collection that receives one document per form post
        state:            disconnected | connecting | connected | failed
    """

    def __init__(
        self,
        url: str,
        database_name: str,
        collection_name: str,
        server_selection_timeout_ms: Optional[int] = None,
    ):
        self.url = url
        self.database_name = database_name
        self.collection_name = collection_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.state = "disconnected"
        self._client: Optional[AsyncMongoClient] = None
        self._connect_task: Optional[asyncio.Task] = None

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self.server_selection_timeout_ms is not None:
            options["serverSelectionTimeoutMS"] = self.server_selection_timeout_ms
        return options

    async def connect(self) -> None:
        """
        Open the client and confirm the server answers a ping.

        What:    Single connection attempt. Success and failure are both logged.
        Why no raise: A failed connection must not stop the HTTP listener;
                 the process keeps running and every write fails instead.
        Why no retry: There is no reconnection strategy, by contract.
        """
        self.state = "connecting"
        client: Optional[AsyncMongoClient] = None
        try:
            client = AsyncMongoClient(self.url, **self._client_options())
            await client.admin.command("ping")
        except Exception as e:
            self.state = "failed"
            logger.error(
                "MongoDB connection to database '%s' failed: %s",
                self.database_name,
                str(e),
            )
            if client is not None:
                await client.close()
            return

        self._client = client
        self.state = "connected"
        logger.info("MongoDB connected: database '%s'", self.database_name)

    def start(self) -> None:
        """
        Schedule connect() on the running loop and return immediately.

        Called from the lifespan handler so that server startup is not
        sequenced after the store connection.
        """
        self.state = "connecting"
        self._connect_task = asyncio.create_task(self.connect())

    async def get_collection(self) -> AsyncCollection:
        """
        Return the submissions collection.

        Waits for a pending connection attempt. The wait is shielded so a
        cancelled request does not cancel the process-wide connect task.

        Raises:
            StoreUnavailableError: Connection failed or was never started.
        """
        if self._connect_task is not None and not self._connect_task.done():
            await asyncio.shield(self._connect_task)

        if self.state != "connected" or self._client is None:
            raise StoreUnavailableError(
                context={"state": self.state, "database": self.database_name},
            )
        return self._client[self.database_name][self.collection_name]

    async def close(self) -> None:
        """
        What:  Cancels a pending connect attempt and closes the client.
        When:  Called during application shutdown (lifespan handler).
        """
        if self._connect_task is not None and not self._connect_task.done():
            self._connect_task.cancel()
            try:
                await self._connect_task
            except asyncio.CancelledError:
                pass
        if self._client is not None:
            await self._client.close()
            self._client = None
        self.state = "disconnected"


# ── Connection Dependency ─────────────────────────────────────────────────
def get_connection(request: Request) -> MongoConnection:
    """
    FastAPI dependency that provides the process-wide MongoConnection.

    The lifespan handler stores the handle on app.state; tests override this
    dependency with a fake connection instead.
    """
    return request.app.state.connection
