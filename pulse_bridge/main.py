# pulse_bridge/main.py
from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from .channel.dispatcher import CommandDispatcher
from .config import Settings, settings as default_settings
from .exceptions import CredentialError
from .logger import get_logger
from .push.client import PushClient
from .routers.channel_routes import router as channel_router
from .routers.push_routes import router as push_router
from .scanner.facility import CommandMediaIndexer, MediaIndexingFacility
from .scanner.invoker import IndexingInvoker

log = get_logger("main")


def build_media_scanner(settings: Settings, facility: Optional[MediaIndexingFacility] = None) -> CommandDispatcher:
    facility = facility or CommandMediaIndexer(
        settings.MEDIA_SCAN_COMMAND, timeout_s=settings.MEDIA_SCAN_TIMEOUT_S
    )
    invoker = IndexingInvoker(facility)
    return CommandDispatcher(settings.MEDIA_SCANNER_CHANNEL).attach(invoker.handlers())


def create_app(
    settings: Settings = default_settings,
    *,
    facility: Optional[MediaIndexingFacility] = None,
    push_client: Optional[PushClient] = None,
) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
          - attach the media scanner channel
          - initialize the push client (CredentialError aborts startup)
        Shutdown:
          - detach the channel, release the push client
        """
        app.state.media_scanner = build_media_scanner(settings, facility)

        client = push_client
        if client is None and settings.PUSH_ENABLED:
            client = PushClient.from_settings(settings)
        app.state.push_client = client
        if client is None:
            log.info("Push notifications disabled")

        log.info(f"{settings.SERVICE_NAME} started")
        try:
            yield
        finally:
            app.state.media_scanner.detach()
            if client is not None:
                client.close()
            log.info(f"{settings.SERVICE_NAME} shutdown complete")

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version="0.1.0",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"ok": True, "service": settings.SERVICE_NAME, "env": settings.ENV}

    app.include_router(channel_router)
    app.include_router(push_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point: fail before serving if the push credential is bad."""
    push_client = None
    if default_settings.PUSH_ENABLED:
        try:
            push_client = PushClient.from_settings(default_settings)
        except CredentialError:
            log.exception("Error initializing Firebase Admin SDK")
            sys.exit(1)
    uvicorn.run(
        create_app(default_settings, push_client=push_client),
        host=default_settings.HOST,
        port=default_settings.PORT,
    )


if __name__ == "__main__":
    run()
