from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_stream_service
from api.schemas.stream import CatalogValue, StreamListResponse, StreamRead
from app.services.stream_app_service import StreamAppService
from domain.errors import NotFound

router = APIRouter()

@router.get("/streams/", response_model=StreamListResponse, response_model_exclude_unset=True)
def get_streams(
    request: Request,
    # 宣言は OpenAPI 用。検証は QueryFilter.parse が行うため文字列のまま受け取る
    format: Optional[str] = Query(None, description="Format (codec sub type) to search by"),
    genre: Optional[str] = Query(None, description="Genre to search by"),
    q: Optional[str] = Query(None, description="Search string"),
    order: Optional[str] = Query(None, description="-1=Random 0=Descending 1=Ascending"),
    limit: Optional[str] = Query(None, description="Number of results to return"),
    starting_after: Optional[str] = Query(None, description="Return results after this stream id"),
    ending_before: Optional[str] = Query(None, description="Return results before this stream id"),
    service: StreamAppService = Depends(get_stream_service),
):
    """
    ストリーム一覧。limit 指定時かつ満杯のページには next_url / prev_url を付与する。
    """
    page = service.find_streams(request.query_params.multi_items(), request.url.path)

    links = {}
    if page.next_url:
        links["next_url"] = page.next_url
    if page.prev_url:
        links["prev_url"] = page.prev_url

    return {
        "streams": [stream.model_dump() for stream in page.streams],
        "data": links,
    }

@router.get("/streams/{stream_id}", response_model=StreamRead)
def get_stream(stream_id: str, service: StreamAppService = Depends(get_stream_service)):
    try:
        parsed_id = int(stream_id)
    except ValueError:
        raise NotFound(f"Stream {stream_id} not found")
    return service.get_stream(parsed_id)

@router.get("/genres/", response_model=List[CatalogValue])
def get_genres(service: StreamAppService = Depends(get_stream_service)):
    """Get all unique genres in the catalog."""
    return [{"val": genre} for genre in service.get_all_genres()]

@router.get("/formats/", response_model=List[CatalogValue])
def get_formats(service: StreamAppService = Depends(get_stream_service)):
    """Get all unique formats (codec sub types) in the catalog."""
    return [{"val": fmt} for fmt in service.get_all_formats()]
