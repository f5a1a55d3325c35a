"""IS-LM model: parameters, closed-form equilibrium and curve helpers.

Goods market (IS):  Y = C + I + G,  C = C0 + c(Y - T),  I = I0 - b*r
Money market (LM):  M/P = L(Y, r) = k*Y - h*r

Solving both for r gives
    IS: r = (A - (1-c)Y) / b      with A = C0 + I0 + G - c*T
    LM: r = (kY - M/P) / h
and the intersection
    Y* = (h*A + b*M/P) / (b*k + h*(1-c)),  r* = (k*Y* - M/P) / h
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import DEGENERACY_TOLERANCE
from .errors import DegenerateModelError, InvalidParameterError
from .state import on_step_grid, validate_parameters

logger = logging.getLogger(__name__)

# Slider grid of the marginal propensity to consume
MPC_STEP = 0.05

# =============================================================================
# PARAMETER DOMAINS
# =============================================================================


class ISLMParameters(BaseModel):
    """One IS-LM parameter set; every field declares its domain.

    Defaults are the textbook values: A = 320, Y* = 1314.29, r* = 2.857 %.
    """

    C0: float = Field(100.0, title="Autonomous consumption (C0)")
    I0: float = Field(100.0, title="Autonomous investment (I0)")
    G: float = Field(200.0, ge=0, le=1000, title="Government spending (G)")
    T: float = Field(100.0, ge=0, le=1000, title="Taxes (T)")
    c: float = Field(0.8, ge=0.1, le=0.95, title="Marginal propensity to consume (c)")
    b: float = Field(20.0, gt=0, title="Interest sensitivity of investment (b)")
    M: float = Field(600.0, ge=100, le=2000, title="Nominal money supply (M)")
    P: float = Field(1.0, ge=0.1, title="Price level (P)")
    k: float = Field(0.5, title="Income sensitivity of money demand (k)")
    h: float = Field(20.0, gt=0, title="Interest sensitivity of money demand (h)")

    model_config = ConfigDict(frozen=True, strict=True, allow_inf_nan=False, extra="forbid")

    @classmethod
    def from_mapping(cls, values):
        """Parameter set from a mapping holding every field"""
        for name in cls.model_fields:
            if name not in values:
                raise InvalidParameterError(name, None, "missing from parameter mapping")
        return validate_parameters(cls, {name: values[name] for name in cls.model_fields})

    def replace(self, **changes):
        """Validated copy with some fields changed"""
        data = self.model_dump()
        data.update(changes)
        return validate_parameters(ISLMParameters, data)

    def as_dict(self):
        return self.model_dump()

    @property
    def autonomous_expenditure(self):
        """A = C0 + I0 + G - cT"""
        return self.C0 + self.I0 + self.G - self.c * self.T

    @property
    def real_money(self):
        """M/P"""
        return self.M / self.P

    @property
    def denominator(self):
        """b*k + h*(1-c); zero means IS and LM are parallel"""
        return self.b * self.k + self.h * (1 - self.c)


class ISLMInputs(ISLMParameters):
    """Parameter set as entered in the sidebar: c also sits on the slider grid"""

    @field_validator("c")
    @classmethod
    def validate_mpc_step(cls, v: float) -> float:
        if not on_step_grid(v, MPC_STEP, origin=0.1):
            raise ValueError(f"c {v} is not a multiple of {MPC_STEP} from 0.1")
        return v


ISLM_DEFAULTS = ISLMParameters().model_dump()


@dataclass(frozen=True)
class Equilibrium:
    """Intersection of IS and LM; r is in percent"""

    A: float
    Y: float
    r: float
    params: Optional[ISLMParameters] = field(default=None, compare=False, repr=False)

    def as_dict(self):
        return {"A": self.A, "Y": self.Y, "r": self.r}


# =============================================================================
# SOLVER
# =============================================================================


def _is_degenerate(params):
    scale = max(abs(params.b * params.k), abs(params.h * (1 - params.c)), 1.0)
    return abs(params.denominator) <= DEGENERACY_TOLERANCE * scale


def solve(params):
    """Closed-form IS-LM equilibrium.

    Raises DegenerateModelError when b*k + h*(1-c) is (numerically) zero
    instead of returning infinities or NaN. A mapping is validated into
    ISLMParameters first, so P and h are already bounded away from zero.
    """
    if not isinstance(params, ISLMParameters):
        params = ISLMParameters.from_mapping(params)

    denominator = params.denominator
    if _is_degenerate(params):
        logger.warning("Degenerate IS-LM model, denominator=%r", denominator)
        raise DegenerateModelError(denominator)

    A = params.autonomous_expenditure
    real_money = params.real_money
    numerator = params.h * A + params.b * real_money

    Y = numerator / denominator
    r = (params.k * Y - real_money) / params.h

    if not (math.isfinite(Y) and math.isfinite(r)):
        raise DegenerateModelError(
            denominator, "No unique equilibrium: solution is not finite"
        )
    return Equilibrium(A=A, Y=Y, r=r, params=params)


def fiscal_multiplier(params):
    """dY*/dG = h / (b*k + h*(1-c))"""
    if _is_degenerate(params):
        raise DegenerateModelError(params.denominator)
    return params.h / params.denominator


def monetary_multiplier(params):
    """dY*/dM = b / (P * (b*k + h*(1-c)))"""
    if _is_degenerate(params):
        raise DegenerateModelError(params.denominator)
    return params.b / (params.P * params.denominator)


# =============================================================================
# CURVES
# =============================================================================


def is_curve(params, Y):
    """Interest rate along the IS curve, r = (A - (1-c)Y) / b"""
    Y = np.asarray(Y, dtype=float)
    return (params.autonomous_expenditure - (1 - params.c) * Y) / params.b


def lm_curve(params, Y):
    """Interest rate along the LM curve, r = (kY - M/P) / h"""
    Y = np.asarray(Y, dtype=float)
    return (params.k * Y - params.real_money) / params.h


def aggregate_expenditure(params, Y, r):
    """Planned expenditure at income Y for a given rate: AE = A - b*r + c*Y"""
    Y = np.asarray(Y, dtype=float)
    return params.autonomous_expenditure - params.b * r + params.c * Y


def money_demand(params, Y, r):
    """Real money demand L = kY - hr"""
    r = np.asarray(r, dtype=float)
    return params.k * Y - params.h * r


def demand_components(params, equilibrium):
    """Consumption, investment and government spending at the equilibrium"""
    consumption = params.C0 + params.c * (equilibrium.Y - params.T)
    investment = params.I0 - params.b * equilibrium.r
    return {
        "Consumption (C)": consumption,
        "Investment (I)": investment,
        "Government (G)": params.G,
        "Total (Y)": consumption + investment + params.G,
    }


def solve_snapshot(snapshot):
    """Node function: equilibrium from an InputState snapshot"""
    return solve(ISLMParameters.from_mapping(snapshot))
