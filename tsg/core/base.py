from sqlalchemy.ext.asyncio import AsyncEngine

from tsg.utils.logger import get_logger


class BaseService:
    """Base service class with database engine dependency injection."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.logger = get_logger(self.__class__.__name__)
