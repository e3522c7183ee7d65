"""Command line interface for the HydroGuard calculation core.

Usage examples (after `pip install -e .`):

  hydroguard simulate --rain 15 --hours 4 --area 426 --efficiency 60 \
      --capacity 3645 --level 2850 --river-capacity 60000 --river-flow 15000
  hydroguard prioritize --depth 6 --location Hospital --population 5000
  hydroguard validate-proposal --cost 45 --impact 9
  hydroguard city chennai --preset monsoon_peak
  hydroguard presets
  hydroguard batch --preset monsoon_peak --preset drought --output report.txt
  hydroguard diagnostics

No database or network access; every command runs the core locally.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List

from hydroguard.config import settings
from hydroguard.domain.cities import CITIES, get_city
from hydroguard.domain.proposals import validate_proposal
from hydroguard.domain.recovery import LocationType, assess_task
from hydroguard.domain.scenario import PRESETS, ScenarioInput, get_preset
from hydroguard.domain.simulation import simulate_city, simulate_pair
from hydroguard.errors import HydroGuardError
from hydroguard.services.batch import run_batch, write_batch_report
from hydroguard.services.diagnostics import run_diagnostics


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _cmd_simulate(args: argparse.Namespace) -> int:
    result = simulate_pair(
        rainfall_mm_hr=args.rain,
        duration_hours=args.hours,
        area_sq_km=args.area,
        efficiency_percent=args.efficiency,
        capacity=args.capacity,
        current_level=args.level,
        river_design_capacity=args.river_capacity,
        river_current_flow=args.river_flow,
        soil_saturation_percent=args.saturation,
    )
    _print_json(result)
    return 0


def _cmd_prioritize(args: argparse.Namespace) -> int:
    task = assess_task(args.depth, args.location, args.population)
    print(f"Priority: {task.tier.value} (score {task.score}, badge {task.tier.badge})")
    return 0


def _cmd_validate_proposal(args: argparse.Namespace) -> int:
    score = validate_proposal(args.cost, args.impact)
    if not score.is_valid:
        print(f"Proposal rejected: {score.tier.value}")
        return 0
    print(f"Efficiency: {score.tier.value} (ratio {score.ratio:.2f} Cr per impact point)")
    return 0


def _cmd_city(args: argparse.Namespace) -> int:
    profile = get_city(args.city)
    if args.preset:
        scenario = get_preset(args.preset)
    else:
        scenario = ScenarioInput(
            rainfall_intensity_mm_hr=args.rain,
            duration_hours=args.hours,
            soil_saturation_percent=args.saturation,
            tide_level_meters=args.tide,
        )
    snapshot = simulate_city(profile, scenario)
    if args.json:
        _print_json(snapshot.to_dict())
        return 0

    print(f"{profile.name} | mode={snapshot.mode.value} | risk={snapshot.risk.label}")
    print(f"Runoff: {snapshot.runoff_cusecs} cusecs")
    print("Reservoirs:")
    for res in snapshot.reservoirs:
        flag = " OVERFLOW" if res.id in snapshot.overflowed else ""
        print(f"  {res.name:<20} {res.current_level_mcft:>9.1f} / {res.capacity_mcft:g} Mcft "
              f"({res.pct_full:5.1f}%){flag}")
    print("Rivers:")
    for river in snapshot.rivers:
        print(f"  {river.name:<20} {river.current_flow_cusecs:>10.1f} / "
              f"{river.design_capacity_cusecs:g} cusecs [{river.status.value}]")
    if snapshot.alerts:
        print("Alerts:")
        for alert in snapshot.alerts:
            print(f"  [{alert.severity.upper()}] {alert.title} - {alert.message}")
    return 0


def _cmd_presets(_: argparse.Namespace) -> int:
    for preset_id, (label, scenario) in PRESETS.items():
        print(f"{preset_id:<16} {label:<34} rain={scenario.rainfall_intensity_mm_hr:g}mm/hr "
              f"hours={scenario.duration_hours:g} saturation={scenario.soil_saturation_percent:g}%")
    return 0


def _cmd_batch(args: argparse.Namespace) -> int:
    preset_ids = args.preset or list(PRESETS)
    scenarios = [(pid, get_preset(pid)) for pid in preset_ids]
    profiles = [get_city(cid) for cid in args.city] if args.city else None
    snapshots = run_batch(scenarios, profiles)
    path = write_batch_report(snapshots, output_file=args.output, append=args.append)
    alerting = sum(1 for s in snapshots if s.alerts_triggered)
    print(f"{len(snapshots)} runs, {alerting} with alerts. Output written to: {path}")
    return 0


def _cmd_diagnostics(_: argparse.Namespace) -> int:
    results = run_diagnostics()
    for r in results:
        status = "PASSED" if r.passed else "FAILED"
        print(f"[{status}] {r.category:<10} {r.scenario} -> {r.outputs}")
        if r.failure_reason:
            print(f"          {r.failure_reason}")
    failed = sum(1 for r in results if not r.passed)
    print(f"{len(results) - failed}/{len(results)} checks passed")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hydroguard",
        description="HydroGuard flood/drought calculation core",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_sim = sub.add_parser(
        "simulate", help="Runoff + one reservoir/river time step")
    p_sim.add_argument("--rain", type=float, required=True,
                       help="Rainfall intensity (mm/hr)")
    p_sim.add_argument("--hours", type=float, required=True,
                       help="Step duration (hours)")
    p_sim.add_argument("--area", type=float, required=True,
                       help="Catchment area (sq km)")
    p_sim.add_argument("--efficiency", type=float, required=True,
                       help="Runoff efficiency (percent)")
    p_sim.add_argument("--capacity", type=float, required=True,
                       help="Reservoir capacity (Mcft)")
    p_sim.add_argument("--level", type=float, required=True,
                       help="Current reservoir level (Mcft)")
    p_sim.add_argument("--river-capacity", dest="river_capacity", type=float,
                       required=True, help="River design capacity (cusecs)")
    p_sim.add_argument("--river-flow", dest="river_flow", type=float,
                       required=True, help="Current river flow (cusecs)")
    p_sim.add_argument("--saturation", type=float, default=50,
                       help="Soil saturation (percent)")
    p_sim.set_defaults(func=_cmd_simulate)

    p_pri = sub.add_parser(
        "prioritize", help="Score rescue urgency for a flooded location")
    p_pri.add_argument("--depth", type=float, required=True,
                       help="Water depth (ft)")
    p_pri.add_argument("--location", default=LocationType.OTHER.value,
                       help="Hospital, Residential, Road or Other")
    p_pri.add_argument("--population", type=float, default=0,
                       help="Population affected")
    p_pri.set_defaults(func=_cmd_prioritize)

    p_val = sub.add_parser(
        "validate-proposal", help="Classify an infrastructure proposal's cost efficiency")
    p_val.add_argument("--cost", type=float, required=True,
                       help="Estimated cost (crore)")
    p_val.add_argument("--impact", type=float, required=True,
                       help="Impact score (1-10)")
    p_val.set_defaults(func=_cmd_validate_proposal)

    p_city = sub.add_parser(
        "city", help="Run a what-if scenario against a city profile")
    p_city.add_argument("city", nargs="?", default=settings.DEFAULT_CITY,
                        choices=sorted(CITIES), help="City profile id")
    p_city.add_argument("--preset", choices=sorted(PRESETS),
                        help="Use a named scenario preset")
    p_city.add_argument("--rain", type=float, default=0,
                        help="Rainfall intensity (mm/hr)")
    p_city.add_argument("--hours", type=float, default=12,
                        help="Duration (hours)")
    p_city.add_argument("--saturation", type=float, default=40,
                        help="Soil saturation (percent)")
    p_city.add_argument("--tide", type=float, default=0.0,
                        help="Tide level (m)")
    p_city.add_argument("--json", action="store_true",
                        help="Print the full snapshot as JSON")
    p_city.set_defaults(func=_cmd_city)

    p_pre = sub.add_parser("presets", help="List scenario presets")
    p_pre.set_defaults(func=_cmd_presets)

    p_batch = sub.add_parser(
        "batch", help="Run presets across city profiles and write a text report")
    p_batch.add_argument("--preset", action="append", choices=sorted(PRESETS),
                         help="Preset to run (repeatable, default: all)")
    p_batch.add_argument("--city", action="append", choices=sorted(CITIES),
                         help="City to include (repeatable, default: all)")
    p_batch.add_argument("--output", help="Report path (default: timestamped file)")
    p_batch.add_argument("--append", action="store_true",
                         help="Append to an existing report")
    p_batch.set_defaults(func=_cmd_batch)

    p_diag = sub.add_parser(
        "diagnostics", help="Run the core self-check suite")
    p_diag.set_defaults(func=_cmd_diagnostics)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except HydroGuardError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
