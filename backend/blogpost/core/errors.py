from __future__ import annotations

from dataclasses import dataclass, field


class BlogError(Exception):
    status_code = 400
    message = "bad_request"


@dataclass(eq=False)
class ValidationFailed(BlogError):
    errors: dict[str, list[str]] = field(default_factory=dict)

    status_code = 422
    message = "validation_failed"

    def __str__(self) -> str:
        return "; ".join(f"{k}: {', '.join(v)}" for k, v in self.errors.items())

    @classmethod
    def single(cls, field_name: str, msg: str) -> "ValidationFailed":
        return cls(errors={field_name: [msg]})


class Forbidden(BlogError):
    status_code = 403
    message = "forbidden"


@dataclass(eq=False)
class NotFound(BlogError):
    entity: str = "resource"

    status_code = 404

    @property
    def message(self) -> str:  # type: ignore[override]
        return f"{self.entity}_not_found"

    def __str__(self) -> str:
        return self.message


class NotAuthenticated(BlogError):
    status_code = 401
    message = "unauthenticated"


class MethodNotAllowed(BlogError):
    status_code = 405
    message = "method_not_allowed"


def errors_from_pydantic(errs, strip_source: bool = False) -> dict[str, list[str]]:
    # strip_source drops the body/query/path prefix FastAPI adds to request errors
    out: dict[str, list[str]] = {}
    for e in errs:
        loc = [str(p) for p in e.get("loc", ())]
        if strip_source and loc and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        key = loc[0] if loc else "__root__"
        msg = str(e.get("msg", "invalid"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.setdefault(key, []).append(msg)
    return out
