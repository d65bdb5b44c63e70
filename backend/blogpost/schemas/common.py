from typing import Any, TypeVar

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

from blogpost.core.errors import ValidationFailed, errors_from_pydantic

M = TypeVar("M", bound=BaseModel)


def envelope(data: Any = None, message: str | None = None, success: bool = True) -> dict:
    out: dict[str, Any] = {"success": success}
    if data is not None:
        out["data"] = jsonable_encoder(data)
    if message is not None:
        out["message"] = message
    return out


def validate_or_fail(model: type[M], data: Any) -> M:
    try:
        return model.model_validate(data if data is not None else {})
    except ValidationError as e:
        raise ValidationFailed(errors=errors_from_pydantic(e.errors())) from None
