"""Static page that renders the cached fixtures."""

from fastapi import APIRouter
from fastapi.responses import FileResponse, JSONResponse

from config import settings

router = APIRouter()


@router.get("/", response_model=None)
async def index() -> FileResponse | JSONResponse:
    index_path = settings.public_dir / "index.html"
    if not index_path.is_file():
        return JSONResponse({"error": "Frontend not found"}, status_code=404)
    return FileResponse(index_path)
