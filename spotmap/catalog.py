import json
import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from spotmap.core.errors import CatalogError, CatalogFileMissing
from spotmap.models import Criterion, Spot

logger = logging.getLogger(__name__)


class Catalog(BaseModel):
    """
    Read-only spot and criteria catalog for one session.
    Supplied once at session start; swapping it means starting a new session.
    """

    model_config = ConfigDict(frozen=True)

    spots: List[Spot] = []
    criteria: List[Criterion] = []

    @model_validator(mode="after")
    def _check_unique_ids(self):
        for label, records in (("spot", self.spots), ("criterion", self.criteria)):
            seen = set()
            for record in records:
                if record.id in seen:
                    raise ValueError(f"duplicate {label} id {record.id}")
                seen.add(record.id)
        return self

    @classmethod
    def from_records(cls, data) -> "Catalog":
        """Validate raw records, failing fast with CatalogError."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Malformed catalog: {e}") from e

    def find_spot(self, spot_id: int) -> Optional[Spot]:
        for spot in self.spots:
            if spot.id == spot_id:
                return spot
        return None

    def find_criterion(self, criterion_id: int) -> Optional[Criterion]:
        for criterion in self.criteria:
            if criterion.id == criterion_id:
                return criterion
        return None


def load_catalog(path: str) -> Catalog:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogFileMissing(f"Catalog file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file is not valid JSON: {path} ({e})") from e

    catalog = Catalog.from_records(data)
    logger.info(
        f"Loaded catalog from {path}: {len(catalog.spots)} spots, "
        f"{len(catalog.criteria)} criteria"
    )
    return catalog
