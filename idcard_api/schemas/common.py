# idcard_api/schemas/common.py
"""Shared schema plumbing: camelCase wire names and the response envelope."""
from typing import Any, Dict, Iterable, Optional, Type

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PageParams(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def dump(schema: Type[BaseModel], obj: Any) -> Dict[str, Any]:
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def dump_many(schema: Type[BaseModel], objs: Iterable[Any]):
    return [dump(schema, obj) for obj in objs]


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    pagination: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    """Build the ``{success, data?, message?, pagination?}`` body."""
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if pagination is not None:
        body["pagination"] = Pagination(**pagination).model_dump()
    return body


def describe_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Flatten pydantic error dicts into ``field: message; ...``."""
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"
