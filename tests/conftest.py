"""Shared fixtures for the simulator tests."""

import logging

import numpy as np
import pytest

from config.module_presets import DEFAULT_PRESET, PRESET_DATABASE
from pv_simulator.analysis.corrections import calculate_operating_parameters
from pv_simulator.analysis.diode_models import ModelType
from pv_simulator.analysis.simulation import ModuleParameters


@pytest.fixture
def jinko_params() -> ModuleParameters:
    """Jinko JKM410M-72H-V at STC with the Lambert W model."""
    return ModuleParameters(
        marca="Jinko",
        referencia="JKM410M-72H-V",
        isc=10.6,
        voc=50.4,
        gop=1000.0,
        top=25.0,
        alpha_i=0.048,
        beta_v=0.0,
        acelda=0.0126,
        ns=144,
        np=1,
        n=0.9273,
        rs=0.004,
        rsh=500.0,
        pmax=410.0,
        modelo=ModelType.LAMBERT,
    )


@pytest.fixture
def jinko_unity_ideality(jinko_params) -> ModuleParameters:
    """Same module with n = 1, where SDM and the multi-diode models share a scale."""
    return jinko_params.replace(n=1.0)


@pytest.fixture
def jinko_operating_point(jinko_params):
    """Operating-point parameters of the Jinko module at STC."""
    p = jinko_params
    return calculate_operating_parameters(
        isc=p.isc, voc=p.voc, rs=p.rs, rsh=p.rsh, n=p.n, ns=p.ns,
        irradiance=p.gop, temperature=p.top, alpha_percent=p.alpha_i,
    )


@pytest.fixture
def voltage_sweep() -> np.ndarray:
    """201-point sweep from 0 to 1.05 * 50.4 V."""
    return 1.05 * 50.4 * np.arange(201) / 200


@pytest.fixture
def all_presets():
    return list(PRESET_DATABASE.values())


@pytest.fixture
def default_preset():
    return DEFAULT_PRESET


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
