from __future__ import annotations
from typing import Optional, Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Body

from schemas import (
    BirthPayload,
    DecodeIn, DecodeOut,
    ChartOut,
    ReportOut, ReportData,
    ConnectionPairIn, ConnectionOut,
    TransitConnectionIn, TransitConnectionOut,
)
from services.chart_services import calculate_chart, build_chart_report, decode_longitudes
from services.connection_services import calculate_connection, calculate_transit_connection


def _require_api_headers(
    x_correlation_id: Annotated[Optional[str], Header(alias="X-Correlation-ID")] = None,
    x_transaction_id: Annotated[Optional[str], Header(alias="X-Transaction-ID")] = None,
    x_session_id: Annotated[Optional[str], Header(alias="X-Session-ID")] = None,
    x_app_id: Annotated[Optional[str], Header(alias="X-App-ID")] = None,
    authorization: Annotated[Optional[str], Header(alias="Authorization")] = None,
) -> None:
    if not authorization or not str(authorization).strip():
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    missing = []
    if not x_correlation_id:
        missing.append("X-Correlation-ID")
    if not x_transaction_id:
        missing.append("X-Transaction-ID")
    if not x_session_id:
        missing.append("X-Session-ID")
    if not x_app_id:
        missing.append("X-App-ID")

    if missing:
        raise HTTPException(status_code=400, detail=f"Missing required headers: {', '.join(missing)}")


router = APIRouter(prefix="/api", dependencies=[Depends(_require_api_headers)])

_BIRTH_EXAMPLE = {
    "sample": {
        "summary": "Sample",
        "value": {
            "name": "Amit",
            "dateOfBirth": "1991-07-14",
            "timeOfBirth": "22:35:00",
            "placeOfBirth": "Mumbai, IN",
            "timeZone": "Asia/Kolkata",
            "latitude": 19.0760,
            "longitude": 72.8777,
        },
    }
}


# --------------- Chart -----------------
@router.post("/chart/decode", response_model=DecodeOut, tags=["Chart"], summary="Decode ecliptic longitudes into activations")
def decode_chart_longitudes(
    req: DecodeIn = Body(
        ...,
        openapi_examples={"sample": {"summary": "Sample", "value": {"longitudes": [0.0, 123.4, 359.99]}}},
    ),
) -> DecodeOut:
    return DecodeOut(data=decode_longitudes(req.longitudes))


@router.post("/chart/build", response_model=ChartOut, tags=["Chart"], summary="Build chart (type, authority, profile, centers, channels)")
def build_chart(
    payload: BirthPayload = Body(..., openapi_examples=_BIRTH_EXAMPLE),
) -> ChartOut:
    return ChartOut(data=calculate_chart(payload))


@router.post("/chart/report", response_model=ReportOut, tags=["Chart"], summary="Plain-text birth chart analysis")
def chart_report(
    payload: BirthPayload = Body(..., openapi_examples=_BIRTH_EXAMPLE),
) -> ReportOut:
    return ReportOut(data=ReportData(text=build_chart_report(payload)))


# --------------- Connection -----------------
@router.post("/connection/analyze", response_model=ConnectionOut, tags=["Connection"], summary="Composite analysis of two charts")
def analyze_connection(
    req: ConnectionPairIn = Body(
        ...,
        openapi_examples={
            "sample": {
                "summary": "Sample",
                "value": {
                    "person1": {
                        "name": "Amit","dateOfBirth": "1991-07-14","timeOfBirth": "22:35:00","placeOfBirth": "Mumbai, IN",
                        "timeZone": "Asia/Kolkata","latitude": 19.0760,"longitude": 72.8777
                    },
                    "person2": {
                        "name": "Riya","dateOfBirth": "1993-02-20","timeOfBirth": "06:10:00","placeOfBirth": "Delhi, IN",
                        "timeZone": "Asia/Kolkata","latitude": 28.6139,"longitude": 77.2090
                    },
                },
            }
        },
    ),
) -> ConnectionOut:
    return ConnectionOut(data=calculate_connection(req))


@router.post("/transit/connection", response_model=TransitConnectionOut, tags=["Transit"], summary="Birth chart vs transit composite and report")
def transit_connection(
    req: TransitConnectionIn = Body(
        ...,
        openapi_examples={
            "sample": {
                "summary": "Sample",
                "value": {**_BIRTH_EXAMPLE["sample"]["value"], "transitDate": "2025-11-01", "transitTime": "12:00"},
            }
        },
    ),
) -> TransitConnectionOut:
    birth = BirthPayload.model_validate(req.model_dump(exclude={"transitDate", "transitTime"}))
    return TransitConnectionOut(data=calculate_transit_connection(birth, req.transitDate, req.transitTime))
