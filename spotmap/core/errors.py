from fastapi import HTTPException
from starlette import status


class CatalogError(ValueError):
    """Raised when a spot/criteria catalog is not a well-formed set of records."""


class CatalogFileMissing(CatalogError):
    """The catalog file does not exist. The only catalog problem that is not fatal at startup."""


class SpotNotFound(HTTPException):
    def __init__(self, spot_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Spot {spot_id} not found"
        )
        self.spot_id = spot_id
