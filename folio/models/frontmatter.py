"""Front-matter schemas, one per content collection.

Schemas are closed (``extra="forbid"``) so a misspelt key fails the build
instead of being silently ignored.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, HttpUrl, field_validator, model_validator


def _coerce_date(value):
    """Accept YAML dates, ISO dates and ISO datetimes (date part kept)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if "T" in text or " " in text:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    return value


class BlogFrontmatter(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str
    description: str
    date: date
    draft: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        return _coerce_date(value)


class ProjectFrontmatter(BlogFrontmatter):
    demoURL: Optional[HttpUrl] = None
    repoURL: Optional[HttpUrl] = None


class WorkFrontmatter(BaseModel):
    """Work history entry.

    ``dateEnd`` may be omitted or set to ``"Current"`` for an ongoing role.
    The common ``title``/``description``/``date``/``draft`` shape is derived
    so work entries can be listed alongside posts and projects.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    company: str
    role: str
    dateStart: date
    dateEnd: Optional[date] = None
    draft: bool = False

    @field_validator("dateStart", mode="before")
    @classmethod
    def parse_start(cls, value):
        return _coerce_date(value)

    @field_validator("dateEnd", mode="before")
    @classmethod
    def parse_end(cls, value):
        if isinstance(value, str) and value.strip().lower() == "current":
            return None
        return _coerce_date(value)

    @model_validator(mode="after")
    def check_range(self) -> "WorkFrontmatter":
        if self.dateEnd is not None and self.dateEnd < self.dateStart:
            raise ValueError("dateEnd must not be before dateStart")
        return self

    @property
    def title(self) -> str:
        return f"{self.role} at {self.company}"

    @property
    def description(self) -> str:
        return self.title

    @property
    def date(self) -> date:
        return self.dateStart

    @property
    def is_current(self) -> bool:
        return self.dateEnd is None


SCHEMAS = {
    "blog": BlogFrontmatter,
    "projects": ProjectFrontmatter,
    "work": WorkFrontmatter,
}
