import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from blogpost.core.config import settings
from blogpost.core.errors import BlogError, NotAuthenticated, ValidationFailed, errors_from_pydantic
from blogpost.db.session import init_db
from blogpost.schemas.common import envelope
from blogpost.api.routes.auth import router as auth_router
from blogpost.api.routes.posts import router as api_posts_router
from blogpost.api.routes.public import router as public_router
from blogpost.web.routes.admin import router as admin_router
from blogpost.web.routes.dashboard import router as dashboard_router
from blogpost.web.routes.home import router as home_router
from blogpost.web.routes.posts import router as web_posts_router
from blogpost.web.routes.profile import admin_router as admin_profile_router, user_router as profile_router
from blogpost.web.routes.session import router as session_router
from blogpost.web.templating import render

logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("blogpost")

app = FastAPI(title="BlogPost")

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api")


@app.exception_handler(BlogError)
def _handle_blog_error(request: Request, exc: BlogError):
    if _wants_json(request):
        body = envelope(message=exc.message, success=False)
        if isinstance(exc, ValidationFailed):
            body["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=body)
    if isinstance(exc, NotAuthenticated):
        return RedirectResponse("/login", status_code=302)
    return render(request, "error.html", {"code": exc.status_code, "message": exc.message}, exc.status_code)


@app.exception_handler(RequestValidationError)
def _handle_request_validation(request: Request, exc: RequestValidationError):
    errors = errors_from_pydantic(exc.errors(), strip_source=True)
    if not _wants_json(request):
        return render(request, "error.html", {"code": 422, "message": ValidationFailed.message}, 422)
    return JSONResponse(
        status_code=422,
        content={**envelope(message=ValidationFailed.message, success=False), "errors": errors},
    )


@app.exception_handler(Exception)
def _handle_unexpected(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    if not _wants_json(request):
        return render(request, "error.html", {"code": 500, "message": "server_error"}, 500)
    return JSONResponse(status_code=500, content=envelope(message="server_error", success=False))


@app.get("/health")
@app.get("/api/health")
def health():
    return {"status": "ok"}


app.include_router(public_router)
app.include_router(auth_router)
app.include_router(api_posts_router)
app.include_router(home_router)
app.include_router(session_router)
app.include_router(dashboard_router)
app.include_router(web_posts_router)
app.include_router(profile_router)
app.include_router(admin_router)
app.include_router(admin_profile_router)


@app.on_event("startup")
def _create_tables():
    init_db()
