"""Input State: current parameter values validated through a pydantic model.

Every write goes through ``InputState.set`` which validates the new value
with the session's parameter model, keeps the previous values on failure
and notifies subscribers (memoised nodes) on success.
"""

import logging
import threading
from types import MappingProxyType

from pydantic import ValidationError

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)

# Tolerance used when checking that a value lies on a slider step grid
STEP_TOLERANCE = 1e-9


def on_step_grid(value, step, origin=0.0):
    steps = (value - origin) / step
    return abs(steps - round(steps)) <= STEP_TOLERANCE * max(1.0, abs(steps))


def parameter_error(error):
    """Map the first error of a pydantic ValidationError to InvalidParameterError"""
    detail = error.errors()[0]
    loc = detail.get("loc") or (error.title,)
    name = str(loc[0])
    value = None if detail.get("type") == "missing" else detail.get("input")
    return InvalidParameterError(name, value, detail.get("msg", str(error)))


def validate_parameters(model, values):
    """Build ``model`` from ``values`` or raise InvalidParameterError"""
    try:
        return model.model_validate(values)
    except ValidationError as e:
        raise parameter_error(e) from e


class InputState:
    """Holds the current parameter set of one session.

    ``model`` is a frozen pydantic model whose fields declare the names,
    defaults and domains of the parameters. The current set is one model
    instance that is replaced, never mutated, on every accepted write.
    """

    def __init__(self, model, initial=None):
        self._model = model
        self._current = model()
        self._listeners = []
        self._lock = threading.RLock()

        if initial:
            self.update(initial)

    @property
    def model(self):
        return self._model

    @property
    def names(self):
        return tuple(self._model.model_fields)

    def field(self, name):
        """Declared field of ``name``; unknown names are rejected"""
        try:
            return self._model.model_fields[name]
        except KeyError:
            raise InvalidParameterError(name, None, "unknown parameter") from None

    def get(self, name):
        self.field(name)
        with self._lock:
            return getattr(self._current, name)

    def __getitem__(self, name):
        return self.get(name)

    def __contains__(self, name):
        return name in self._model.model_fields

    def parameters(self):
        """The current validated parameter model"""
        with self._lock:
            return self._current

    def set(self, name, value):
        """Validate and store a value, then notify subscribers"""
        return self.update({name: value})[name]

    def update(self, values):
        """Write several parameters at once; nothing is written if any value is invalid"""
        for name in values:
            self.field(name)

        with self._lock:
            data = self._current.model_dump()
            data.update(values)
            try:
                candidate = validate_parameters(self._model, data)
            except InvalidParameterError as e:
                logger.warning("Rejected write %s=%r: %s", e.name, e.value, e.reason)
                raise
            self._current = candidate
            listeners = list(self._listeners)

        written = {name: getattr(candidate, name) for name in values}
        logger.debug("Set %s", ", ".join(f"{k}={v!r}" for k, v in written.items()))

        for name in written:
            for listener in listeners:
                listener(name)
        return written

    def snapshot(self, names=None):
        """Immutable, consistent view of the requested parameters"""
        if names is not None:
            for name in names:
                self.field(name)
        with self._lock:
            current = self._current
        data = current.model_dump()
        if names is not None:
            data = {name: data[name] for name in names}
        return MappingProxyType(data)

    def subscribe(self, listener):
        """Register ``listener(name)`` to be called after every successful write"""
        with self._lock:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener):
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def __repr__(self):
        with self._lock:
            current = self._current
        values = ", ".join(f"{k}={v!r}" for k, v in current.model_dump().items())
        return f"InputState({values})"
