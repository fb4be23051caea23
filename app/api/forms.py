"""GET vs POST demo endpoints.

Each route reads from exactly one transport location and echoes what it got:

    GET  /search        query string, one named field
    GET  /filter        query string, several fields (one with a space in its name)
    GET  /login-wrong   query string, credentials (insecure on purpose)
    POST /login-right   request body, credentials
    POST /submit        multipart body, fields and files
    GET  /crash         always 500
"""

from robyn import Response

from app.core.router import Router
from app.models.core import FormData, Page, QueryData
from app.services import echo

router = Router()


@router.get("/")
async def root() -> Response:
    return echo.index_redirect()


@router.get("/search")
async def search(query: QueryData) -> Page:
    return echo.search_page(query)


@router.get("/filter")
async def filter_(query: QueryData) -> Page:
    return echo.filter_page(query)


@router.get("/login-wrong")
async def login_wrong(query: QueryData) -> Page:
    return echo.login_wrong_page(query)


@router.post("/login-right")
async def login_right(form: FormData) -> Page:
    return echo.login_right_page(form)


@router.post("/submit")
async def submit(form: FormData) -> Page:
    return echo.submit_page(form)


@router.get("/crash")
async def crash() -> Response:
    return echo.crash_response()
