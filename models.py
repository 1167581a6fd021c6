"""
Data model for the plate search engine.

PlateRecord and SearchResult cross the engine boundary (pydantic, JSON-ready);
ScoredCandidate only lives inside a single search call.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PlateRecord(BaseModel):
    """One license-plate district code of the corpus (read-only)"""
    model_config = ConfigDict(frozen=True)

    id: Union[int, str] = Field(..., description="Opaque identifier")
    code: str = Field(..., description="District code, unique in the corpus")
    city: str
    region: Optional[str] = None
    state: str


@dataclass
class ScoredCandidate:
    """Record plus its relevance score (lower is better)"""
    record: PlateRecord
    score: float
    distance: Optional[int] = None


class SearchResult(BaseModel):
    """One page of ranked matches"""
    data: List[PlateRecord] = Field(default_factory=list)
    total: int = Field(0, description="Matches before pagination")
    page: int
    limit: int

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready mapping: data, total, page, limit"""
        return self.model_dump(mode="json")
