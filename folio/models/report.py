from typing import List, Literal, Optional

from pydantic import BaseModel


class Issue(BaseModel):
    level: Literal["error", "warning"]
    code: str
    message: str
    source: Optional[str] = None  # file or constant the issue refers to


class IntegrityReport(BaseModel):
    issues: List[Issue] = []

    @property
    def errors(self) -> List[Issue]:
        return [i for i in self.issues if i.level == "error"]

    @property
    def warnings(self) -> List[Issue]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def ok(self) -> bool:
        return not self.errors


class LinkResult(BaseModel):
    url: str
    ok: bool
    status: Optional[int] = None
    error: Optional[str] = None


class CheckResponse(BaseModel):
    ok: bool
    issues: List[Issue]
    links: List[LinkResult] = []


class BuildReport(BaseModel):
    out_dir: str
    pages: List[str]
    files: int
    digest: str
    duration_ms: int
    warnings: List[Issue] = []
