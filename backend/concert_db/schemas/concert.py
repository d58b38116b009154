"""
Pydantic schemas for concert request/response validation.
Numbers are strict so JSON booleans are rejected instead of coerced.
"""

from typing import Any, Optional, Union
from pydantic import BaseModel, Field, StrictFloat, StrictInt


class ConcertLinkCreate(BaseModel):
    link: str = Field(..., min_length=1, max_length=2048)


class ConcertLinksCreate(BaseModel):
    links: list[str] = Field(..., min_length=1)


class ConcertLinkResponse(BaseModel):
    key: str
    link: str


class ConcertLinkListResponse(BaseModel):
    links: list[str]
    total: int


class RandomConcertResponse(BaseModel):
    link: Optional[str]


class CountUpdate(BaseModel):
    count: Union[StrictInt, StrictFloat]


class CountResponse(BaseModel):
    # Whatever is stored, unconverted
    count: Any


class RevidUpdate(BaseModel):
    revid: Union[StrictInt, StrictFloat]


class RevidResponse(BaseModel):
    revid: Any
