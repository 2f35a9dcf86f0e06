import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


class MapByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class TurnModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    straight_threshold_deg: float = Field(default=10.0, gt=0.0, le=180.0)


class QueryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    start: int = Field(ge=0)
    goal: int = Field(ge=0)


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str = "local"
    map: MapByPath
    turns: TurnModel = TurnModel()
    log: LogModel = LogModel()
    queries: list[QueryModel] = Field(default_factory=list)
