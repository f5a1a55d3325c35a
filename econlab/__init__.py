"""Interactive IS-LM equilibrium explorer and Central Limit Theorem demo."""

from .clt import (
    CLTParameters,
    Distribution,
    Histogram,
    SamplingResult,
    histogram,
    normal_curve,
    simulate,
)
from .config import RenderConfig, configure_logging
from .errors import DegenerateModelError, EconLabError, InvalidParameterError
from .islm import Equilibrium, ISLMInputs, ISLMParameters, solve
from .reactive import MemoizedNode
from .session import CLTSession, ISLMSession
from .state import InputState

__all__ = [
    "CLTParameters",
    "CLTSession",
    "DegenerateModelError",
    "Distribution",
    "EconLabError",
    "Equilibrium",
    "Histogram",
    "ISLMInputs",
    "ISLMParameters",
    "ISLMSession",
    "InputState",
    "InvalidParameterError",
    "MemoizedNode",
    "RenderConfig",
    "SamplingResult",
    "configure_logging",
    "histogram",
    "normal_curve",
    "simulate",
    "solve",
]

__version__ = "0.1.0"
