"""
Food API — Client application serving

Static assets come from STATIC_DIR; every other GET falls back to the
single-page app's index.html so client-side routes survive a reload.
Registered last so API routes always win.
"""
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from food_api.core.config import get_settings
from food_api.core.errors import NotFound

settings = get_settings()
router = APIRouter(tags=["client"])


def _resolve_static(path: str) -> Path | None:
    root = Path(settings.STATIC_DIR).resolve()
    candidate = (root / path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@router.get("/{path:path}", include_in_schema=False)
async def serve_client(path: str):
    static_file = _resolve_static(path) if path else None
    if static_file is not None:
        return FileResponse(static_file)

    index = Path(settings.CLIENT_DIST_DIR) / "index.html"
    if not index.is_file():
        raise NotFound("Client application is not built.")
    return FileResponse(index)
