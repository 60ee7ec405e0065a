"""
Todo API - Pydantic Request/Response Schemas
=============================================

What:  The JSON contract of the service.
How:   FastAPI validates request bodies against TodoRequest and serializes
       ORM rows through TodoResponse. A body that does not fit (missing
       `content`, non-string `content`, text that is not valid UTF-8,
       invalid JSON) is rejected before the handler runs and answered with 400.
"""

from pydantic import BaseModel, Field, field_validator


class TodoResponse(BaseModel):
    """Returned by GET /todo_list (as array items) and GET /todo/{id}."""
    id: int = Field(description="Store-assigned todo identifier")
    content: str = Field(description="Todo text")

    model_config = {"from_attributes": True}


class TodoRequest(BaseModel):
    """Body of POST /add_todo and PUT /update_todo/{id}."""
    content: str = Field(description="Todo text; any string, including empty")

    @field_validator("content")
    @classmethod
    def validate_utf8(cls, v: str) -> str:
        """
        Rejects text SQLite cannot store.

        JSON allows escaped lone surrogates such as "\\ud800"; they decode to
        a str that has no UTF-8 encoding.
        """
        try:
            v.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValueError(
                f"content is not valid UTF-8 text (position {e.start})"
            ) from e
        return v
