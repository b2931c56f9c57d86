"""Base service class for business logic."""

from __future__ import annotations

import logging

from postboard.infra.logging import get_lazy_logger


class BaseService:
    """Base class for service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class PostService(BaseService):
            def __init__(self, session: AsyncSession):
                super().__init__()
                self._session = session

            async def delete_post(self, post_id: UUID) -> bool:
                self.logger.info("Deleting post", extra={"post_id": str(post_id)})
                ...
    """

    def __init__(self) -> None:
        class_name = self.__class__.__name__
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)
