"""
Tests for InputState and the parameter models

Checks:
1. Declared domains of the IS-LM and CLT parameter models
2. Rejected writes keep the previous value
3. Subscribers are notified of successful writes only
"""

import math
import threading

import pytest

from pydantic import ValidationError

from econlab.clt import CLTParameters, Distribution
from econlab.errors import InvalidParameterError
from econlab.islm import ISLM_DEFAULTS, ISLMInputs, ISLMParameters
from econlab.state import InputState, on_step_grid, validate_parameters


@pytest.fixture
def islm_state() -> InputState:
    return InputState(ISLMInputs)


@pytest.fixture
def clt_state() -> InputState:
    return InputState(CLTParameters)


class TestDefaults:
    def test_islm_defaults(self, islm_state: InputState) -> None:
        assert dict(islm_state.snapshot()) == ISLM_DEFAULTS

    def test_clt_defaults(self, clt_state: InputState) -> None:
        assert clt_state["distribution"] is Distribution.UNIFORM
        assert clt_state["n"] == 5
        assert clt_state["bins"] == 50

    def test_initial_values_override_defaults(self) -> None:
        state = InputState(ISLMInputs, {"G": 300})
        assert state["G"] == 300.0


class TestISLMValidation:
    @pytest.mark.parametrize(
        "name,value",
        [
            ("c", 0.05),
            ("c", 0.99),
            ("c", 0.82),
            ("G", -1),
            ("G", 1000.5),
            ("T", 1001),
            ("M", 99),
            ("M", 2001),
            ("P", 0.0),
            ("P", 0.05),
            ("b", 0),
            ("b", -5),
            ("h", 0),
            ("C0", math.nan),
            ("k", math.inf),
            ("G", "200"),
            ("G", True),
        ],
    )
    def test_out_of_domain_rejected(self, islm_state: InputState, name: str, value) -> None:
        previous = islm_state[name]
        with pytest.raises(InvalidParameterError) as exc_info:
            islm_state.set(name, value)
        assert exc_info.value.name == name
        assert islm_state[name] == previous

    @pytest.mark.parametrize(
        "name,value",
        [
            ("c", 0.1),
            ("c", 0.95),
            ("c", 0.65),
            ("G", 0),
            ("G", 1000),
            ("M", 100),
            ("P", 0.1),
            ("k", -0.3),
            ("C0", -500),
            ("b", 0.01),
        ],
    )
    def test_in_domain_accepted(self, islm_state: InputState, name: str, value) -> None:
        islm_state.set(name, value)
        assert islm_state[name] == pytest.approx(value)

    def test_real_values_stored_as_float(self, islm_state: InputState) -> None:
        islm_state.set("G", 300)
        assert isinstance(islm_state["G"], float)

    def test_unknown_parameter_rejected(self, islm_state: InputState) -> None:
        with pytest.raises(InvalidParameterError):
            islm_state.set("Z", 1.0)
        with pytest.raises(InvalidParameterError):
            islm_state.get("Z")

    def test_invalid_parameter_error_is_value_error(self, islm_state: InputState) -> None:
        with pytest.raises(ValueError):
            islm_state.set("c", 2.0)


class TestCLTValidation:
    @pytest.mark.parametrize("n", [0, -1, 201, 2.5, True])
    def test_sample_size_domain(self, clt_state: InputState, n) -> None:
        with pytest.raises(InvalidParameterError):
            clt_state.set("n", n)
        assert clt_state["n"] == 5

    @pytest.mark.parametrize("bins", [9, 101, 50.0])
    def test_bins_domain(self, clt_state: InputState, bins) -> None:
        with pytest.raises(InvalidParameterError):
            clt_state.set("bins", bins)

    def test_sample_size_bounds_accepted(self, clt_state: InputState) -> None:
        clt_state.set("n", 1)
        assert clt_state["n"] == 1
        clt_state.set("n", 200)
        assert clt_state["n"] == 200

    def test_distribution_by_member_or_value(self, clt_state: InputState) -> None:
        clt_state.set("distribution", Distribution.BETA)
        assert clt_state["distribution"] is Distribution.BETA
        clt_state.set("distribution", "exp")
        assert clt_state["distribution"] is Distribution.EXPONENTIAL

    def test_unknown_distribution_rejected(self, clt_state: InputState) -> None:
        with pytest.raises(InvalidParameterError):
            clt_state.set("distribution", "normal")
        assert clt_state["distribution"] is Distribution.UNIFORM


class TestUpdate:
    def test_update_is_all_or_nothing(self, islm_state: InputState) -> None:
        with pytest.raises(InvalidParameterError):
            islm_state.update({"G": 500, "c": 3.0})
        assert islm_state["G"] == ISLM_DEFAULTS["G"]

    def test_update_writes_all(self, islm_state: InputState) -> None:
        islm_state.update({"G": 500, "T": 200})
        assert islm_state["G"] == 500.0
        assert islm_state["T"] == 200.0


class TestSubscribers:
    def test_listener_called_on_write(self, islm_state: InputState) -> None:
        seen = []
        islm_state.subscribe(seen.append)
        islm_state.set("G", 250)
        islm_state.set("G", 250)
        assert seen == ["G", "G"]

    def test_listener_not_called_on_rejected_write(self, islm_state: InputState) -> None:
        seen = []
        islm_state.subscribe(seen.append)
        with pytest.raises(InvalidParameterError):
            islm_state.set("G", -10)
        assert seen == []

    def test_unsubscribe(self, islm_state: InputState) -> None:
        seen = []
        islm_state.subscribe(seen.append)
        islm_state.unsubscribe(seen.append)
        islm_state.set("G", 250)
        assert seen == []

    def test_reads_do_not_notify(self, islm_state: InputState) -> None:
        seen = []
        islm_state.subscribe(seen.append)
        islm_state.get("G")
        islm_state.snapshot()
        assert seen == []


class TestSnapshot:
    def test_snapshot_is_read_only(self, islm_state: InputState) -> None:
        snapshot = islm_state.snapshot(["G", "T"])
        assert dict(snapshot) == {"G": 200.0, "T": 100.0}
        with pytest.raises(TypeError):
            snapshot["G"] = 1.0

    def test_snapshot_not_affected_by_later_writes(self, islm_state: InputState) -> None:
        snapshot = islm_state.snapshot()
        islm_state.set("G", 900)
        assert snapshot["G"] == 200.0

    def test_snapshot_consistent_under_concurrent_writes(self) -> None:
        """update() writes G and T together; snapshots never see half an update"""
        state = InputState(ISLMInputs)
        stop = threading.Event()

        def writer() -> None:
            value = 0
            while not stop.is_set():
                value = (value + 10) % 1000
                state.update({"G": value, "T": value})

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            for _ in range(2000):
                snapshot = state.snapshot(["G", "T"])
                assert snapshot["G"] == snapshot["T"] or snapshot["G"] == 200.0
        finally:
            stop.set()
            thread.join()


class TestParameterModels:
    """Domains declared on the pydantic models"""

    @pytest.mark.parametrize(
        "changes",
        [{"c": 1.045}, {"G": 1100.0}, {"T": -200.0}, {"P": 0.0}, {"h": 0.0}, {"k": math.nan}],
    )
    def test_out_of_domain_model_rejected(self, changes: dict) -> None:
        with pytest.raises(ValidationError):
            ISLMParameters(**changes)

    def test_models_are_frozen(self) -> None:
        params = ISLMParameters()
        with pytest.raises(ValidationError):
            params.G = 300.0

    def test_mpc_off_slider_grid_only_rejected_for_inputs(self) -> None:
        """c = 0.88 is a valid model value but not a sidebar value"""
        assert ISLMParameters(c=0.88).c == 0.88
        with pytest.raises(ValidationError):
            ISLMInputs(c=0.88)

    def test_replace_validates(self) -> None:
        params = ISLMParameters(G=1000.0)
        with pytest.raises(InvalidParameterError) as exc_info:
            params.replace(G=1100.0)
        assert exc_info.value.name == "G"
        assert exc_info.value.value == 1100.0

    def test_replace_returns_new_instance(self) -> None:
        params = ISLMParameters()
        changed = params.replace(G=300.0)
        assert changed.G == 300.0
        assert params.G == 200.0

    def test_from_mapping_missing_key(self) -> None:
        values = dict(ISLM_DEFAULTS)
        del values["h"]
        with pytest.raises(InvalidParameterError) as exc_info:
            ISLMParameters.from_mapping(values)
        assert exc_info.value.name == "h"

    def test_validate_parameters_maps_errors(self) -> None:
        with pytest.raises(InvalidParameterError) as exc_info:
            validate_parameters(CLTParameters, {"n": 0})
        assert exc_info.value.name == "n"
        assert exc_info.value.value == 0

    def test_clt_defaults(self) -> None:
        params = CLTParameters()
        assert params.distribution is Distribution.UNIFORM
        assert (params.n, params.bins) == (5, 50)

    @pytest.mark.parametrize("value,expected", [(0.1, True), (0.95, True), (0.65, True), (0.82, False)])
    def test_step_grid(self, value: float, expected: bool) -> None:
        assert on_step_grid(value, 0.05, origin=0.1) is expected
