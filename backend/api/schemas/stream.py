from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from domain.models.stream import StreamRecord

class StreamRead(StreamRecord):
    id: int

class PageLinks(BaseModel):
    model_config = ConfigDict(extra="forbid")

    next_url: Optional[str] = None
    prev_url: Optional[str] = None

class StreamListResponse(BaseModel):
    streams: List[StreamRead]
    data: PageLinks

class CatalogValue(BaseModel):
    val: str
