from typing import List

from pydantic import BaseModel, Field, HttpUrl


class Site(BaseModel):
    """Site identity shown in the header, footer and homepage."""

    NAME: str
    EMAIL: str
    NUM_POSTS_ON_HOMEPAGE: int = Field(ge=0)
    NUM_WORKS_ON_HOMEPAGE: int = Field(ge=0)
    NUM_PROJECTS_ON_HOMEPAGE: int = Field(ge=0)


class Metadata(BaseModel):
    TITLE: str
    DESCRIPTION: str


class Social(BaseModel):
    NAME: str
    HREF: HttpUrl


Socials = List[Social]
