"""Main entry point for the realtime chat server."""

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from pydantic import ValidationError
from starlette.applications import Starlette

from realtime_chat.adapters.auth import BcryptPasswordHasher, JwtSessionStore
from realtime_chat.adapters.config import AppConfig
from realtime_chat.adapters.media import CloudinaryImageStore, InlineImageStore
from realtime_chat.adapters.persistence import Database, SqliteMessageLog, SqliteUserRepository
from realtime_chat.adapters.realtime import RealtimeGateway
from realtime_chat.adapters.web import ChatWebAdapter
from realtime_chat.application.services import AuthService, ChatService, DeliveryDispatcher
from realtime_chat.domain.ports import ImageStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


@dataclass
class ChatComponents:
    """Everything wired together for one server process."""

    config: AppConfig
    database: Database
    image_store: ImageStore
    gateway: RealtimeGateway
    dispatcher: DeliveryDispatcher
    chat_service: ChatService
    auth_service: AuthService


def build_image_store(config: AppConfig) -> ImageStore:
    """Create the image store selected by ``image_store``."""
    if config.image_store == "cloudinary":
        # Credentials are guaranteed by AppConfig validation
        return CloudinaryImageStore(
            cloud_name=config.cloudinary_cloud_name or "",
            api_key=config.cloudinary_api_key or "",
            api_secret=config.cloudinary_api_secret or "",
            timeout_seconds=config.cloudinary_timeout_seconds,
        )
    return InlineImageStore()


def build_components(config: AppConfig) -> ChatComponents:
    """Wire adapters and services together; nothing is opened yet."""
    database = Database(config.database_path)
    users = SqliteUserRepository(database)
    message_log = SqliteMessageLog(database)
    image_store = build_image_store(config)

    gateway = RealtimeGateway(close_superseded_connections=config.close_superseded_connections)
    dispatcher = DeliveryDispatcher(message_log, gateway)

    chat_service = ChatService(users, message_log, image_store, dispatcher)
    auth_service = AuthService(
        users,
        JwtSessionStore(config.jwt_secret, config.session_ttl_seconds),
        BcryptPasswordHasher(rounds=config.bcrypt_rounds),
        image_store,
    )
    return ChatComponents(
        config=config,
        database=database,
        image_store=image_store,
        gateway=gateway,
        dispatcher=dispatcher,
        chat_service=chat_service,
        auth_service=auth_service,
    )


def create_web_adapter(config: AppConfig | None = None) -> ChatWebAdapter:
    """Build the web adapter with a lifespan that opens and closes its resources."""
    config = config if config is not None else AppConfig()
    components = build_components(config)

    @asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        await components.database.connect()
        logger.info(f"Opened database at {config.database_path}")
        try:
            yield
        finally:
            if isinstance(components.image_store, CloudinaryImageStore):
                await components.image_store.close()
            await components.database.close()
            logger.info("Closed database")

    return ChatWebAdapter(
        components.chat_service,
        components.auth_service,
        components.gateway,
        config,
        lifespan=lifespan,
    )


def create_app(config: AppConfig | None = None) -> Starlette:
    """Application factory, also usable as ``uvicorn --factory realtime_chat.main:create_app``."""
    return create_web_adapter(config).app


def load_config() -> AppConfig:
    """Load configuration from the environment, exiting on invalid settings."""
    try:
        return AppConfig()
    except ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)


async def main() -> None:
    """Main application entry point."""
    config = load_config()

    logging.getLogger().setLevel(config.log_level)
    if config.jwt_secret == "change-me" and not config.development:
        logger.warning("JWT_SECRET is not set, using the insecure default")

    web_adapter = create_web_adapter(config)
    try:
        await web_adapter.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        await web_adapter.stop()


def run() -> None:
    """Console script entry point."""
    config = load_config()
    if config.reload:
        import uvicorn

        # uvicorn only reloads apps given as an import string
        uvicorn.run(
            "realtime_chat.main:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=True,
            ws_ping_interval=config.ws_ping_interval_seconds,
            ws_ping_timeout=config.ws_ping_timeout_seconds,
        )
        return
    asyncio.run(main())


if __name__ == "__main__":
    run()
