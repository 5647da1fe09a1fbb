from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tsg.config import DBPoolConfig
from tsg.database.driver_logging import install_driver_logging
from tsg.utils.logger import get_logger

logger = get_logger(__name__)


def create_engine_from_config(db_pool: DBPoolConfig) -> AsyncEngine:
    """Create the async engine and route the driver logs through the bridge."""
    install_driver_logging(db_pool.log_level, db_pool.logger)

    engine = create_async_engine(
        db_pool.url,
        echo=False,
        pool_size=db_pool.max_connections,
        max_overflow=0,
        connect_args={"server_settings": dict(db_pool.runtime_params)},
    )
    logger.info(
        "Database engine created",
        host=db_pool.url.host,
        port=db_pool.url.port,
        database=db_pool.url.database,
        max_connections=db_pool.max_connections,
        driver_log_level=db_pool.log_level.name,
    )
    return engine
