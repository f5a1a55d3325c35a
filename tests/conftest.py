import pytest

from econlab.islm import ISLMParameters


@pytest.fixture
def textbook_params() -> ISLMParameters:
    """C0=100, I0=100, G=200, T=100, c=0.8, b=20, M=600, P=1, k=0.5, h=20"""
    return ISLMParameters()


@pytest.fixture
def degenerate_params() -> ISLMParameters:
    """b*k = -h*(1-c): IS and LM have the same slope"""
    return ISLMParameters(b=20.0, k=-0.2, h=20.0, c=0.8)
