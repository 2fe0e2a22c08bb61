from fastapi import Request
from app.services.stream_app_service import StreamAppService

def get_stream_service(request: Request) -> StreamAppService:
    """create_app() が app.state に組み立てたサービスを返す"""
    return request.app.state.stream_service
