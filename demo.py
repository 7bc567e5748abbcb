#!/usr/bin/env python3
"""Demo script for the PV Module I-V Simulator.

Demonstrates:
1. Loading a preset module definition
2. Simulation with the four equivalent-circuit models
3. Operating-condition effects (irradiance and temperature)
"""

from config.module_presets import DEFAULT_PRESET
from pv_simulator.analysis.simulation import compare_models, simulate
from pv_simulator.ingestion import preset_to_params
from pv_simulator.logging_config import setup_logging
from pv_simulator.reporting import generate_summary


def main():
    setup_logging()

    print("=" * 70)
    print("PV Module I-V Simulator - Demo")
    print("=" * 70)
    print()

    params = preset_to_params(DEFAULT_PRESET).replace(beta_v=-0.14)
    print(f"Module: {params.marca} {params.referencia}")
    print(f"   Isc = {params.isc} A, Voc = {params.voc} V, Pmax = {params.pmax} W")
    print()

    result = simulate(params)
    print(generate_summary(result, params))

    print("=" * 70)
    print("MODEL COMPARISON (STC)")
    print("=" * 70)
    for model, res in compare_models(params).items():
        print(f"{res.model_name:<45} Pmax = {res.pmax_calc:7.2f} W  "
              f"FF = {res.fill_factor:.4f}  Error = {res.error_percent:5.2f} %")
    print()

    print("=" * 70)
    print("OPERATING CONDITIONS (Lambert W)")
    print("=" * 70)
    for gop, top in [(1000, 25), (800, 45), (600, 55), (200, 25)]:
        res = simulate(params.replace(gop=gop, top=top))
        print(f"G = {gop:5.0f} W/m²  T = {top:3.0f} °C  ->  "
              f"Pmax = {res.pmax_calc:7.2f} W at {res.vmpp:6.2f} V, "
              f"efficiency = {res.efficiency:5.2f} %")
    print()
    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
