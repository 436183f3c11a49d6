"""Pydantic models for hosted-forge data."""

from pydantic import BaseModel, ConfigDict


class PullRequestCandidate(BaseModel):
    """A pull request found through a marker comment."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    number: int
    title: str = ""
    web_url: str
