from __future__ import annotations

from typing import Annotated, List, Literal, Tuple, Union

from pydantic import BaseModel, Field, model_validator

from .config import settings
from .train import MAX_SCAN_POINTS


class FeedIn(BaseModel):
    fa: float = Field(gt=0, description="Ethyl acetate flow rate (L/h)")
    fb: float = Field(gt=0, description="NaOH flow rate (L/h)")
    na: float = Field(gt=0, description="Normality of ethyl acetate")
    nb: float = Field(gt=0, description="Normality of NaOH")
    temperature: float = Field(allow_inf_nan=False, description="Reaction temperature (C)")


class PFRIn(BaseModel):
    kind: Literal["PFR"]
    diameter: float = Field(gt=0, description="Tube diameter (cm)")
    length: float = Field(gt=0, description="Tube length (m)")


class CSTRIn(BaseModel):
    kind: Literal["CSTR"]
    volume: float = Field(gt=0, description="Tank volume (L)")


StageIn = Annotated[Union[PFRIn, CSTRIn], Field(discriminator="kind")]


class SimulationRequest(BaseModel):
    feed: FeedIn
    stages: List[StageIn] = Field(default_factory=list)
    tau_min: int = Field(default=settings.tau_min, ge=1)
    tau_max: int = Field(default=settings.tau_max, ge=1)

    @model_validator(mode="after")
    def check_scan(self) -> "SimulationRequest":
        if self.tau_max < self.tau_min:
            raise ValueError("tau_max must not be below tau_min")
        if self.tau_max - self.tau_min + 1 > MAX_SCAN_POINTS:
            raise ValueError(f"Scan may hold at most {MAX_SCAN_POINTS} points")
        return self


class StageOut(BaseModel):
    kind: str
    volume_L: float
    tau: float
    xa_in: float
    xa_out: float


class SimulationResponse(BaseModel):
    Xa: float
    tau: float
    pipe: List[str]
    stages: List[StageOut]
    temps: Tuple[float, float]
    tau_data: List[float]
    Xa_data: List[List[float]]
