"""Base schema and request option types shared by every product."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class Scheme(BaseModel):
    """JSON payload type. Wire names are field aliases; unknown keys are kept."""

    model_config = ConfigDict(populate_by_name=True, extra='allow')


@dataclass
class PageOptions:
    """Bitbucket page-based pagination. Zero / empty values are not sent."""
    page: int = 0
    page_len: int = 0
    q: str = ''
