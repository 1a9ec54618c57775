# model/classifier.py
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class ClassifierResolution(BaseModel):
    width: int
    height: int


class ClassifierRendition(BaseModel):
    uri: str
    resolution: ClassifierResolution
    frame_rate: int = Field(ge=0)
    pixels: int
    features: List[float]


class TamperRequest(BaseModel):
    source: str
    renditions: List[ClassifierRendition]
    orchestratorID: str


class TamperResultFields(BaseModel):
    model_config = ConfigDict(extra="ignore")

    video_available: bool = False
    audio_available: bool = False
    audio_dist: float = 0.0
    pixels: int = 0
    # 1 if the model detects a tamper and 0 otherwise
    tamper: int = 0
    # Orders results that are all marked as tampered, which may be a misclassification
    ocsvm_dist: float = 0.0


class TamperResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    source: str = ""
    results: List[TamperResultFields] = Field(default_factory=list)
