"""BaseService — foundation for profnet services.

Every service receives a :class:`Store` at construction time and owns
its transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from profnet.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from profnet.domain.errors import NetworkError
    from profnet.infrastructure.store import Store


class BaseService:
    """Base for service-layer classes.

    Usage::

        class NetworkService(BaseService):
            def send_message(self, sender: str, ...) -> ServiceResult:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    @staticmethod
    def _failure(op: str, exc: NetworkError) -> ServiceResult:
        """Carry a domain error to the caller unchanged."""
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
        )
