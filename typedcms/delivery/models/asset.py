"""Asset data model."""

from pydantic import BaseModel, ConfigDict


class Asset(BaseModel):
    """Resolved media item.

    Assets carry no outgoing links, so the zero value ``Asset()`` doubles as
    the result of an unresolvable asset reference.
    """

    id: str = ""
    title: str = ""
    description: str = ""
    url: str = ""
    width: int = 0
    height: int = 0
    size: int = 0

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @property
    def is_image(self) -> bool:
        return self.width > 0 and self.height > 0
