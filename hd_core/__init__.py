"""Human Design chart core: decoding, chart properties and connection analysis."""

from .activation import Activation, decode
from .chart import ChartResult, build_chart, build_personality_chart
from .connection import CompositeAnalysis, classify
from .errors import InvalidInputError

__all__ = [
    "Activation",
    "ChartResult",
    "CompositeAnalysis",
    "InvalidInputError",
    "build_chart",
    "build_personality_chart",
    "classify",
    "decode",
]
