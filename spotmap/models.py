from pydantic import BaseModel, ConfigDict, field_validator
from typing import List, Optional


class Criterion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    attribute: str


class Spot(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    latitude: float
    longitude: float
    criteria: List[Criterion] = []
    # First entry is the display image
    image_url: Optional[List[str]] = None

    @field_validator("criteria", mode="before")
    @classmethod
    def _null_criteria(cls, value):
        # A spot sent with "criteria": null has no criteria
        return [] if value is None else value


class FilterState(BaseModel):
    query: str = ""
    selected_criteria: List[Criterion] = []


class Region(BaseModel):
    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float


class Marker(BaseModel):
    id: int
    latitude: float
    longitude: float


class SpotDetail(BaseModel):
    name: str
    image: Optional[str] = None
    image_placeholder: Optional[str] = None
    criteria: List[str] = []


class CriterionChip(BaseModel):
    id: int
    attribute: str
    selected: bool


class SearchRequest(BaseModel):
    query: str = ""
    criteria_ids: List[int] = []


class SearchResponse(BaseModel):
    count: int
    results: List[Spot]


class QueryUpdate(BaseModel):
    text: str


class OverlayView(BaseModel):
    visible: bool
    detail: Optional[SpotDetail] = None
    message: Optional[str] = None


class SessionView(BaseModel):
    query: str
    selected_criteria: List[int]
    chips: List[CriterionChip]
    suggestions: List[Spot]
    markers: List[Marker]
    region: Region
    transition_ms: Optional[int] = None
    focus: Optional[int] = None
    overlay: OverlayView
    keyboard_visible: bool
