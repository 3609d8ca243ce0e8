"""
Simple text-based summary of the current polar case and saved cases.
"""

from __future__ import annotations

from typing import Iterable

from rollpolar_app.models import ControlFile, OperatingParameters, PolarDataset, SavedCase


def build_session_summary_text(
    control: ControlFile,
    params: OperatingParameters,
    dataset: PolarDataset | None = None,
    roll_deg: float | None = None,
    traffic_light: str = "",
    cases: Iterable[SavedCase] = (),
) -> str:
    lines: list[str] = []
    lines.append(f"Vessel: {control.vessel_info.name} (IMO: {control.vessel_info.imo})")
    lines.append(f"Draft: {params.draft_category.value} (aft {params.draft_aft_peak_m:.2f} m, "
                 f"fwd {params.draft_fore_peak_m:.2f} m)")
    lines.append(f"GM: {params.gm_m:.2f} m")
    lines.append(f"Hs: {params.hs_m:.2f} m  Tz: {params.tz_s:.2f} s")
    lines.append(f"Heading: {params.heading_deg:.0f} deg  Speed: {params.speed_kn:.1f} kn")
    lines.append(f"Wave direction: {params.wave_direction_deg:.0f} deg")
    lines.append(f"Max roll angle: {params.max_roll_angle_deg:.1f} deg")
    if dataset is not None:
        lines.append("")
        lines.append(
            f"Fitted: GM {dataset.fitted_gm:.2f} m, Hs {dataset.fitted_hs:.2f} m, Tz {dataset.fitted_tz:.2f} s"
        )
        lines.append(f"Data file: {dataset.source_path}")
    if roll_deg is not None:
        status = f" [{traffic_light}]" if traffic_light else ""
        lines.append(f"Roll: {roll_deg:.2f} deg{status}")

    cases = list(cases)
    if cases:
        lines.append("")
        lines.append(f"Saved cases ({len(cases)}):")
        for case in cases:
            roll = "-" if case.roll_deg is None else f"{case.roll_deg:.2f} deg"
            flag = " DANGER" if case.is_in_danger_zone else ""
            lines.append(f"  {case.case_id}: {case.timestamp.isoformat()} roll {roll}{flag}")
    return "\n".join(lines)
