# model/api.py
from typing import List, Optional, Union
from pydantic import BaseModel, Field, field_validator, model_validator
from core.profiles import PROFILES
from util import functions


class EvidenceIn(BaseModel):
    sourcePath: str = ""
    renditionPath: str = Field(min_length=1)
    # Transcoder output lists arrive either as JSON arrays or comma-delimited strings
    positions: Union[List[float], str] = Field(default_factory=list)
    lengths: Union[List[int], str] = Field(default_factory=list)
    features: Union[List[float], str] = Field(default_factory=list)
    profile: str

    @field_validator("positions", "features")
    @classmethod
    def _floats(cls, v: Union[List[float], str]) -> List[float]:
        return functions.parse_float_list(v)

    @field_validator("lengths")
    @classmethod
    def _ints(cls, v: Union[List[int], str]) -> List[int]:
        return functions.parse_int_list(v)

    @field_validator("profile")
    @classmethod
    def _known_profile(cls, v: str) -> str:
        if v not in PROFILES:
            raise ValueError(f"unknown profile {v!r}")
        return v

    @model_validator(mode="after")
    def _parallel(self) -> "EvidenceIn":
        if len(self.positions) != len(self.lengths):
            raise ValueError("positions and lengths must have the same count")
        return self


class ChecksIn(BaseModel):
    featureCheck: Optional[bool] = None
    positionCheck: Optional[bool] = None
    inferenceCheck: Optional[bool] = None
    packetCheck: Optional[bool] = None


class VerifyRequest(BaseModel):
    evidences: List[EvidenceIn] = Field(min_length=1)
    checks: ChecksIn = Field(default_factory=ChecksIn)


class VerifyResponse(BaseModel):
    ok: bool
    winner: str
    survivors: List[int]
