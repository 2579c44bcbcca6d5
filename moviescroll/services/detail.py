"""Loading of a single movie's detail record."""

from __future__ import annotations

import logging

from ..errors import UNEXPECTED_ERROR_MESSAGE, CatalogError, ErrorInfo
from ..models import MovieDetail
from ..observable import Observable
from ..transport import CatalogTransport

logger = logging.getLogger(__name__)


class MovieDetailController(Observable):
    """Fetches the detail record for one movie, once."""

    def __init__(self, catalog: CatalogTransport, movie_id: int) -> None:
        super().__init__()
        self._catalog = catalog
        self.movie_id = movie_id
        self.detail: MovieDetail | None = None
        self.is_loading = False
        self.error_info: ErrorInfo | None = None

    @property
    def error(self) -> str | None:
        return self.error_info.message if self.error_info else None

    async def fetch_details(self) -> MovieDetail | None:
        if self.detail is not None or self.is_loading:
            return self.detail

        self.is_loading = True
        self.error_info = None
        self._publish()
        try:
            self.detail = await self._catalog.fetch_movie_detail(self.movie_id)
        except CatalogError as exc:
            logger.warning("Detail fetch for movie %s failed: %s", self.movie_id, exc.message)
            self.error_info = exc.to_info()
        except Exception:
            logger.exception("Unexpected failure fetching movie %s", self.movie_id)
            self.error_info = ErrorInfo(kind="unexpected", message=UNEXPECTED_ERROR_MESSAGE)
        finally:
            self.is_loading = False
            self._publish()
        return self.detail
