from pathlib import Path
from urllib.parse import quote

from fastapi import Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def render(request: Request, name: str, context: dict | None = None, status_code: int = 200):
    ctx = {"status": request.query_params.get("status")}
    ctx.update(context or {})
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)


def redirect(url: str, status: str | None = None) -> RedirectResponse:
    if status:
        url = f"{url}?status={quote(status)}"
    return RedirectResponse(url, status_code=303)


async def form_data(request: Request) -> dict:
    form = await request.form()
    return {k: v for k, v in form.items() if isinstance(v, str)}


def form_method(form: dict, default: str = "POST") -> str:
    """HTML forms can only POST; ``_method`` carries the intended verb."""
    return (form.get("_method") or default).strip().upper()


def payload(form: dict, *fields: str) -> dict:
    return {f: form[f] for f in fields if f in form}
