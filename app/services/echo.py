"""Page builders for the GET vs POST demo endpoints.

Each builder takes the data the router already read off the request and
returns a Page showing exactly what the server received. Nothing here is
stateful; every value of user origin goes through ``html_encode``.
"""

from robyn import Response, status_codes

from app.core.html import NO_FILE_ROW, build_table, html_encode
from app.core.logger import LogIcon, logger
from app.core.router import html_response
from app.core.settings import settings as st
from app.models.core import FormData, Page, QueryData, UploadedFile

CRASH_HTML = "<h1>500 - Internal Server Error</h1><p>Something went terribly wrong (on purpose).</p>"

SPACED_KEY = "end date"


def _get_alert(path: str, query: QueryData) -> str:
    return f"""
        <div class="alert alert-info">
            <strong>Method:</strong> GET<br>
            <strong>Path:</strong> {path}<br>
            <strong>Raw query string:</strong> <code>{html_encode(query.raw)}</code>
        </div>"""


def _post_alert(path: str, form: FormData, note: str) -> str:
    return f"""
        <div class="alert alert-success">
            <strong>Method:</strong> POST<br>
            <strong>Path:</strong> {path}<br>
            <strong>Content-Type:</strong> <code>{html_encode(form.content_type)}</code><br>
            <br>
            {note}
        </div>"""


def index_redirect() -> Response:
    location = f"/{st.INDEX_FILE}"
    logger.debug("Redirecting to form page", icon=LogIcon.REDIRECT, location=location)
    return Response(
        status_code=status_codes.HTTP_302_FOUND,
        headers={"location": location},
        description="",
    )


def search_page(query: QueryData) -> Page:
    """Single-field GET: the form sends ``GET /search?search=kittens``."""
    search_term = query.get("search")

    logger.debug("GET /search hit", icon=LogIcon.NETWORK, query_string=query.raw)
    logger.info("Search requested", icon=LogIcon.DETECTION, search_term=search_term or "(none)")

    body = f"""
        <h2>GET /search</h2>
        {_get_alert("/search", query)}
        <h4>What the server received:</h4>
        {build_table(query)}
        <p class="text-muted">
            Look at the URL bar &mdash; the search term is right there in the URL.
            This is how GET works: data travels in the query string.
        </p>"""
    return Page("GET /search", body)


def filter_page(query: QueryData) -> Page:
    """Multi-field GET whose form has a field literally named ``end date``."""
    logger.debug("GET /filter hit", icon=LogIcon.NETWORK, param_count=len(query))

    if SPACED_KEY in query:
        logger.warning("Query parameter 'end date' contains a space", icon=LogIcon.WARNING, key=SPACED_KEY)

    body = f"""
        <h2>GET /filter</h2>
        {_get_alert("/filter", query)}
        <h4>What the server received:</h4>
        {build_table(query)}
        <div class="alert alert-warning">
            <strong>Notice the "end date" key?</strong> The space in the name attribute
            becomes <code>end+date</code> or <code>end%20date</code> in the URL.
            On the server, you'd need <code>query.get("end date")</code> to read it.
            <br><br>
            <strong>Lesson:</strong> Use underscores or camelCase in name attributes:
            <code>name="end_date"</code> or <code>name="endDate"</code>.
        </div>"""
    return Page("GET /filter", body)


def login_wrong_page(query: QueryData) -> Page:
    """Credentials sent with GET end up in the URL, history and access logs."""
    path = "/login-wrong"
    full_url = path + (query.raw or "")

    logger.error(
        "SECURITY: login attempt via GET, credentials exposed in URL",
        icon=LogIcon.SECURITY,
        username=query.get("username"),
    )
    logger.debug("GET /login-wrong full URL", icon=LogIcon.THREAT, url=full_url)

    body = f"""
        <h2>GET /login-wrong</h2>
        <div class="alert alert-danger">
            <strong>SECURITY PROBLEM!</strong><br>
            <strong>Method:</strong> GET<br>
            <strong>Full URL:</strong> <code>{html_encode(full_url)}</code><br>
            <br>
            Look at the URL bar &mdash; the password is <strong>right there</strong>!<br>
            It's also now in your browser history. And the server's access logs.
        </div>
        <h4>What the server received:</h4>
        {build_table(query)}
        <p class="text-muted">
            The <code>type="password"</code> attribute only masks the input box on screen.
            It does <strong>nothing</strong> to protect the data in transit when using GET.
        </p>"""
    return Page("GET /login-wrong", body)


def login_right_page(form: FormData) -> Page:
    """Same credentials, read from the request body instead of the URL."""
    # The password is never logged, not even at debug level.
    logger.info("POST /login-right login attempt", icon=LogIcon.FORM, username=form.fields.get("username"))

    note = """Look at the URL bar &mdash; no password! The data is in the request body.
            Open DevTools &gt; Network &gt; click the request &gt; Payload to see it."""
    body = f"""
        <h2>POST /login-right</h2>
        {_post_alert("/login-right", form, note)}
        <h4>What the server received:</h4>
        {build_table(form.fields)}
        <p class="text-muted">
            <strong>Important:</strong> POST doesn't encrypt anything &mdash; you still need
            HTTPS for real security. But at minimum the data isn't in the URL bar or browser history.
        </p>"""
    return Page("POST /login-right", body)


def _file_rows(files: list[UploadedFile]) -> str:
    rows = "".join(
        f"""
                <tr>
                    <td><code>{html_encode(upload.name)}</code> (file)</td>
                    <td>
                        <strong>Filename:</strong> {html_encode(upload.filename)}<br>
                        <strong>Size:</strong> {upload.size} bytes<br>
                        <strong>Content-Type:</strong> {html_encode(upload.content_type)}
                    </td>
                </tr>"""
        for upload in files
    )
    return rows or NO_FILE_ROW


def submit_page(form: FormData) -> Page:
    """Multipart POST: regular fields plus uploaded file metadata, never content."""
    logger.info(
        "POST /submit received form",
        icon=LogIcon.UPLOAD,
        field_count=len(form.fields),
        file_count=len(form.files),
    )

    for upload in form.files:
        logger.debug(
            "Uploaded file",
            icon=LogIcon.FILE,
            filename=upload.filename,
            size=upload.size,
            content_type=upload.content_type,
        )
        if upload.size > st.LARGE_UPLOAD_BYTES:
            logger.warning(
                "Large file upload",
                icon=LogIcon.WARNING,
                filename=upload.filename,
                size_mb=round(upload.size / 1_000_000, 1),
            )

    note = """Notice the Content-Type is <code>multipart/form-data</code> &mdash; this is
            what <code>enctype="multipart/form-data"</code> does. It's required for file uploads."""
    body = f"""
        <h2>POST /submit</h2>
        {_post_alert("/submit", form, note)}
        <h4>Form fields received:</h4>
        {build_table(form.fields)}
        <h4>Files received:</h4>
        <table class="table table-bordered table-striped">
            <thead class="table-dark">
                <tr><th>Name (key)</th><th>File details</th></tr>
            </thead>
            <tbody>{_file_rows(form.files)}</tbody>
        </table>"""
    return Page("POST /submit", body)


def crash_response() -> Response:
    """Always a 500 with a fixed body, whatever the request carried."""
    logger.critical("The /crash endpoint was hit", icon=LogIcon.CRITICAL)
    logger.error("Simulated system failure on /crash", icon=LogIcon.ERROR)
    logger.warning("This is the last warning before the system goes down", icon=LogIcon.WARNING)
    return html_response(CRASH_HTML, status_codes.HTTP_500_INTERNAL_SERVER_ERROR)
