"""Exception types shared by the IS-LM explorer and the CLT demo."""


class EconLabError(Exception):
    """Base class for all econlab errors"""


class InvalidParameterError(EconLabError, ValueError):
    """A parameter write fell outside the parameter's declared domain"""

    def __init__(self, name, value, reason):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r} for parameter '{name}': {reason}")


class DegenerateModelError(EconLabError, ArithmeticError):
    """The IS-LM system has no unique equilibrium for the given parameters"""

    def __init__(self, denominator, message=None):
        self.denominator = denominator
        if message is None:
            message = (
                "No unique equilibrium: b*k + h*(1-c) is zero "
                f"(got {denominator!r}), IS and LM curves are parallel"
            )
        super().__init__(message)
