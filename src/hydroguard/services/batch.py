"""Batch what-if runs across every city profile.

Each city/scenario pair is an independent pure call, so the batch only
collects and formats results.
"""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from hydroguard.domain.cities import CityProfile, list_cities
from hydroguard.domain.scenario import ScenarioInput
from hydroguard.domain.simulation import CitySnapshot, simulate_city
from hydroguard.logger import get_logger

log = get_logger(__name__)


def run_batch(
    scenarios: Iterable[tuple],
    profiles: Optional[Iterable[CityProfile]] = None,
) -> List[CitySnapshot]:
    """Simulate every (label, ScenarioInput) pair against every profile."""
    profiles = list(profiles) if profiles is not None else list_cities()
    scenarios = list(scenarios)
    snapshots = [
        simulate_city(profile, scenario)
        for profile in profiles
        for _, scenario in scenarios
    ]
    log.info("Batch complete: {} cities x {} scenarios", len(profiles), len(scenarios))
    return snapshots


def format_batch(snapshots: Iterable[CitySnapshot]) -> List[str]:
    lines = ["=== Batch City Simulation ==="]
    for snap in snapshots:
        s: ScenarioInput = snap.scenario
        lines.append(
            f"\n>>> {snap.city_id} | rain={s.rainfall_intensity_mm_hr:g}mm/hr "
            f"hours={s.duration_hours:g} saturation={s.soil_saturation_percent:g}% "
            f"mode={snap.mode.value} risk={snap.risk.label}")
        for res in snap.reservoirs:
            flag = " OVERFLOW" if res.id in snap.overflowed else ""
            lines.append(f"reservoir={res.name} level={res.current_level_mcft:.1f}Mcft "
                         f"pct={res.pct_full:.1f}%{flag}")
        for river in snap.rivers:
            lines.append(f"river={river.name} flow={river.current_flow_cusecs:.1f}cusecs "
                         f"status={river.status.value}")
        lines.append(f"alerts={len(snap.alerts)}")
    return lines


def write_batch_report(
    snapshots: Iterable[CitySnapshot],
    output_file: str | None = None,
    append: bool = False,
) -> str:
    """Write the formatted batch to a text file and return its path.

    If `output_file` is None a timestamped file under `./simulation_outputs/`
    is created.
    """
    if output_file is None:
        out_dir = Path("simulation_outputs")
        out_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        output_file = str(out_dir / f"batch_sim_{stamp}.txt")

    mode = "a" if append else "w"
    with open(output_file, mode, encoding="utf-8") as f:
        for ln in format_batch(snapshots):
            f.write(ln + "\n")
    log.info("Batch report written to {}", output_file)
    return output_file
