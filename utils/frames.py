"""Tabular views of activations for export (CSV) and inspection."""
from __future__ import annotations

from typing import Iterable, Mapping

import pandas as pd

from hd_core.activation import Activation, decode, format_degrees, zodiac_sign

COLUMNS = ["side", "body", "gate", "line", "color", "tone", "base", "longitude", "sign", "degrees", "house"]


def _row(side: str, body: str, act: Activation) -> dict:
    return {
        "side": side,
        "body": body,
        **act.to_dict(),
        "sign": zodiac_sign(act.longitude),
        "degrees": format_degrees(act.longitude),
    }


def activations_to_frame(**sides: Mapping[str, Activation]) -> pd.DataFrame:
    """One row per (side, body); sides are passed as keyword arguments,
    e.g. ``activations_to_frame(personality=..., design=...)``."""
    rows = [_row(side, body, act) for side, acts in sides.items() for body, act in acts.items()]
    df = pd.DataFrame(rows, columns=COLUMNS)
    df["house"] = df["house"].astype("Int64")
    return df


def decoded_frame(longitudes: Iterable[float]) -> pd.DataFrame:
    rows = [_row("input", f"#{i}", decode(lon)) for i, lon in enumerate(longitudes)]
    return pd.DataFrame(rows, columns=COLUMNS).drop(columns=["side"])
