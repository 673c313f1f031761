from __future__ import annotations
from typing import List, Optional, Dict
from pydantic import BaseModel, Field, ConfigDict


# --------- Common ---------
class ErrorDetail(BaseModel):
    field: Optional[str] = None
    issue: Optional[str] = None


class ErrorEnvelope(BaseModel):
    code: str = Field(default="SERVER_ERROR")
    message: str
    details: Optional[List[ErrorDetail]] = None


class ErrorResponse(BaseModel):
    error: ErrorEnvelope


# --------- Inputs ---------
class BirthPayload(BaseModel):
    """Basic birth details used across requests."""
    model_config = ConfigDict(json_schema_extra={
        "examples": [
            {
                "name": "Amit",
                "dateOfBirth": "1991-07-14",
                "timeOfBirth": "22:35:00",
                "placeOfBirth": "Mumbai, IN",
                "timeZone": "Asia/Kolkata",
                "latitude": 19.0760,
                "longitude": 72.8777,
            }
        ]
    })

    name: str = Field(..., description="Full name of the person.", examples=["Amit"])
    dateOfBirth: str = Field(..., description="Birth date in ISO format YYYY-MM-DD.", examples=["1991-07-14"])
    timeOfBirth: str = Field(..., description="Birth time in 24h format HH:MM or HH:MM:SS.", examples=["22:35:00"])
    placeOfBirth: Optional[str] = Field(default=None, description="Human-readable place name (city, country).", examples=["Mumbai, IN"])
    timeZone: str = Field(default="UTC", description="IANA timezone for the place of birth.", examples=["Asia/Kolkata"])
    latitude: float = Field(default=0.0, ge=-90, le=90, description="Latitude in decimal degrees (north positive).", examples=[19.0760])
    longitude: float = Field(default=0.0, ge=-180, le=180, description="Longitude in decimal degrees (east positive).", examples=[72.8777])


class ConnectionPairIn(BaseModel):
    """Two people whose charts are compared."""
    model_config = ConfigDict(json_schema_extra={
        "examples": [
            {
                "person1": {
                    "name": "Amit", "dateOfBirth": "1991-07-14", "timeOfBirth": "22:35:00", "placeOfBirth": "Mumbai, IN",
                    "timeZone": "Asia/Kolkata", "latitude": 19.0760, "longitude": 72.8777
                },
                "person2": {
                    "name": "Riya", "dateOfBirth": "1993-02-20", "timeOfBirth": "06:10:00", "placeOfBirth": "Delhi, IN",
                    "timeZone": "Asia/Kolkata", "latitude": 28.6139, "longitude": 77.2090
                }
            }
        ]
    })

    person1: BirthPayload = Field(..., description="First person (A)")
    person2: BirthPayload = Field(..., description="Second person (B)")


class TransitConnectionIn(BirthPayload):
    """Birth chart compared with the sky at a UTC instant."""
    transitDate: str = Field(..., description="Transit date (YYYY-MM-DD, UTC).", examples=["2025-11-01"])
    transitTime: str = Field(default="12:00", description="Transit time (HH:MM[:SS], UTC).", examples=["12:00"])


class DecodeIn(BaseModel):
    longitudes: List[float] = Field(..., min_length=1, max_length=1000, description="Ecliptic longitudes in degrees.")


# --------- Outputs ---------
class ActivationOut(BaseModel):
    gate: int
    line: int
    color: int
    tone: int
    base: int
    longitude: float
    house: Optional[int] = None


class PlanetActivation(ActivationOut):
    planetName: str
    planetSign: str
    planetDegree: str


class VariableOut(BaseModel):
    orientation: str  # Left | Right
    color: int
    tone: int
    base: int


class VariablesOut(BaseModel):
    digestion: VariableOut
    environment: VariableOut
    perspective: VariableOut
    awareness: VariableOut


class ChartData(BaseModel):
    name: str
    birthUtc: str
    designUtc: str
    personality: List[PlanetActivation]
    design: List[PlanetActivation]
    activeGates: List[int]
    activeChannels: List[str]
    definedCenters: List[str]
    openCenters: List[str]
    type: str
    authority: str
    profile: str
    definition: str
    variables: VariablesOut
    incarnationCross: str
    modality: str


class ChartOut(BaseModel):
    data: ChartData


class DecodeOut(BaseModel):
    data: List[ActivationOut]


class ReportData(BaseModel):
    text: str


class ReportOut(BaseModel):
    data: ReportData


class ChannelGatesOut(BaseModel):
    gate1: int
    gate2: int
    ownerA: str  # both | gate1 | gate2 | none
    ownerB: str


class ClassifiedChannelOut(BaseModel):
    id: str
    name: str
    type: str
    fromPerson: str  # A | B | composite
    description: Optional[str] = None
    approximate: bool = False
    gates: ChannelGatesOut


class CompositeCentersOut(BaseModel):
    code: str = Field(..., description='"<defined>-<open>", e.g. "7-2".')
    definedCenters: List[str]
    openCenters: List[str]
    definedByAOnly: List[str]
    definedByBOnly: List[str]
    definedByBoth: List[str]
    definedByComposite: List[str]


class ConnectionData(BaseModel):
    personA: str
    personB: str
    compositeGates: List[int]
    compositeChannels: List[str]
    compositeCenters: CompositeCentersOut
    electromagnetic: List[ClassifiedChannelOut]
    compromise: List[ClassifiedChannelOut]
    companion: List[ClassifiedChannelOut]
    dominance: List[ClassifiedChannelOut]


class ConnectionOut(BaseModel):
    data: ConnectionData


class TransitConnectionData(BaseModel):
    connection: ConnectionData
    transitChannels: List[str]
    transitDefinedCenters: List[str]
    report: str
    summary: Dict[str, int] = Field(default_factory=dict, description="Channel counts per connection type.")


class TransitConnectionOut(BaseModel):
    data: TransitConnectionData
