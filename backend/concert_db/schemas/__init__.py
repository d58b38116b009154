from concert_db.schemas.concert import (
    ConcertLinkCreate, ConcertLinksCreate, ConcertLinkResponse, ConcertLinkListResponse,
    RandomConcertResponse, CountUpdate, CountResponse, RevidUpdate, RevidResponse,
)

__all__ = [
    "ConcertLinkCreate", "ConcertLinksCreate", "ConcertLinkResponse", "ConcertLinkListResponse",
    "RandomConcertResponse", "CountUpdate", "CountResponse", "RevidUpdate", "RevidResponse",
]
