"""Static assets, including the form page at /index.html."""

from robyn import Request, Response

from app.core.router import Router
from app.services.static import serve_static

router = Router()


@router.get("/:filename")
async def static_file(request: Request, global_dependencies) -> Response:
    static_root = global_dependencies["state"].static_root
    return serve_static(static_root, request.path_params["filename"])
