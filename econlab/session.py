"""Per-session wiring: input state, memoised nodes and views.

Each browser session owns one session object; nothing here is shared
between sessions.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from .clt import CLTParameters, histogram, make_rng, simulate
from .config import TRIALS, RenderConfig
from .islm import ISLMInputs, solve_snapshot
from .reactive import MemoizedNode
from .state import InputState
from .views import (
    EquilibriumTextView,
    GoodsMarketView,
    ISLMView,
    MoneyMarketView,
    SamplingDistributionView,
)

logger = logging.getLogger(__name__)


class ISLMSession:
    """IS-LM explorer: four views sharing one equilibrium node"""

    def __init__(self, initial=None, render_config=None):
        self.state = InputState(ISLMInputs, initial)
        self.render_config = render_config or RenderConfig.for_platform()
        self.equilibrium = MemoizedNode(self.state, solve_snapshot, name="calc_equilibrium")

        self.views = {
            "goods_market": GoodsMarketView(self.equilibrium),
            "money_market": MoneyMarketView(self.equilibrium),
            "islm": ISLMView(self.equilibrium),
            "equilibrium_text": EquilibriumTextView(self.equilibrium),
        }

    def set(self, name, value):
        return self.state.set(name, value)

    def parameters(self):
        return self.state.parameters()

    def render(self, view):
        return self.views[view].render(self.render_config)

    def render_all(self, parallel=False):
        """Render every view; with ``parallel`` the views run on a thread pool"""
        if not parallel:
            return {name: view.render(self.render_config) for name, view in self.views.items()}

        with ThreadPoolExecutor(max_workers=len(self.views)) as pool:
            futures = {
                name: pool.submit(view.render, self.render_config)
                for name, view in self.views.items()
            }
            return {name: future.result() for name, future in futures.items()}


class CLTSession:
    """CLT demo: sampling and binning cached as separate nodes.

    Sample means depend on (distribution, n) only; changing ``bins``
    re-bins the cached means without drawing new samples.
    """

    def __init__(self, initial=None, seed=None, trials=TRIALS, render_config=None):
        self.state = InputState(CLTParameters, initial)
        self.render_config = render_config or RenderConfig.for_platform()
        self.trials = trials
        self._rng = make_rng(seed)

        self.samples = MemoizedNode(
            self.state, self._simulate, depends_on=("distribution", "n"), name="samples"
        )
        self.histogram = MemoizedNode(
            self.state,
            self._bin,
            depends_on=("distribution", "n", "bins"),
            name="histogram",
        )
        self.view = SamplingDistributionView(self.histogram)

    def _simulate(self, params):
        return simulate(params["distribution"], params["n"], k=self.trials, rng=self._rng)

    def _bin(self, params):
        return histogram(self.samples.get(), params["bins"])

    def set(self, name, value):
        return self.state.set(name, value)

    def render(self):
        return self.view.render(self.render_config)
