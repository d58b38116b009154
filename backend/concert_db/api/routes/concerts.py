"""
Concert endpoints. Thin wrappers over the concert service helpers.
"""

from fastapi import APIRouter, Response, status

from concert_db.schemas.concert import (
    ConcertLinkCreate,
    ConcertLinksCreate,
    ConcertLinkResponse,
    ConcertLinkListResponse,
    RandomConcertResponse,
    CountUpdate,
    CountResponse,
    RevidUpdate,
    RevidResponse,
)
from concert_db.services import concert_service

router = APIRouter(prefix="/concerts", tags=["Concerts"])


@router.get("/random", response_model=RandomConcertResponse)
async def random_concert_endpoint():
    """Random concert link, or null when no links are stored yet."""
    link = await concert_service.get_rand_concert()
    return RandomConcertResponse(link=link)


@router.get("/links", response_model=ConcertLinkListResponse)
async def list_links_endpoint():
    links = await concert_service.get_concert_links()
    return ConcertLinkListResponse(links=links, total=len(links))


@router.post("/links", status_code=status.HTTP_201_CREATED, response_model=ConcertLinkListResponse)
async def push_links_endpoint(payload: ConcertLinksCreate):
    """Append a batch of links, in order."""
    await concert_service.set_concerts_links(payload.links)
    return ConcertLinkListResponse(links=payload.links, total=len(payload.links))


@router.post("/links/new", status_code=status.HTTP_201_CREATED, response_model=ConcertLinkResponse)
async def add_link_endpoint(payload: ConcertLinkCreate):
    key = await concert_service.add_new_concert_link(payload.link)
    return ConcertLinkResponse(key=key, link=payload.link)


@router.get("/count", response_model=CountResponse)
async def get_count_endpoint():
    return CountResponse(count=await concert_service.get_count())


@router.put("/count", status_code=status.HTTP_204_NO_CONTENT)
async def set_count_endpoint(payload: CountUpdate):
    await concert_service.set_count(payload.count)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/count/increment", response_model=CountResponse)
async def increment_count_endpoint():
    """Atomic increment through a Firebase transaction."""
    return CountResponse(count=await concert_service.update_count())


@router.get("/revid", response_model=RevidResponse)
async def get_revid_endpoint():
    return RevidResponse(revid=await concert_service.get_revid())


@router.put("/revid", status_code=status.HTTP_204_NO_CONTENT)
async def set_revid_endpoint(payload: RevidUpdate):
    await concert_service.set_revid(payload.revid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
