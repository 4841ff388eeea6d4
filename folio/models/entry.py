from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict

from folio.models.frontmatter import BlogFrontmatter, ProjectFrontmatter, WorkFrontmatter


class Heading(BaseModel):
    level: int
    text: str
    anchor: str


class Entry(BaseModel):
    """One content document after its front-matter has been validated."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    collection: str
    slug: str
    source: Path
    data: Union[ProjectFrontmatter, BlogFrontmatter, WorkFrontmatter]
    body: str  # raw markup, front-matter removed
    html: str = ""
    reading_time: int = 1
    headings: List[Heading] = []
