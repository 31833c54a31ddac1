from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class JobResource(BaseModel):
    id: int | None = None


class JobInfo(BaseModel):
    """Job object returned by the CDN77 prefetch and purge endpoints."""

    id: str | int | None = None
    type: str | None = None
    state: str | None = None
    cdn: JobResource | None = None
    urls: list[str] = Field(default_factory=list, alias="url")
    paths: list[str] = Field(default_factory=list)
    queued_at: str | None = None
    done_at: str | None = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @property
    def url_count(self) -> int | None:
        if self.urls:
            return len(self.urls)
        if self.paths:
            return len(self.paths)
        return None
