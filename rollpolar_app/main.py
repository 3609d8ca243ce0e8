"""
Command-line entry point for the rollpolar app.

Loads the control file of a project folder, resolves the polar dataset for the
given operating condition and prints the roll at the current speed and
relative wave heading.
"""

import argparse
import sys
from pathlib import Path

from rollpolar_app.config.settings import Settings, init_logging
from rollpolar_app.models import DraftCategory
from rollpolar_app.reports import build_session_summary_text
from rollpolar_app.repositories import SavedCaseRepository, init_database
from rollpolar_app.services.case_export import export_cases_csv
from rollpolar_app.services.coordinates import DirectionMode, convert_wave_direction
from rollpolar_app.services.errors import CaseValidationError, PolarDataError
from rollpolar_app.services.field_classifier import traffic_light
from rollpolar_app.services.file_service import LocalFileSystem
from rollpolar_app.services.polar_service import PolarSession, relative_wave_heading
from rollpolar_app.services.roll_interpolation import InterpolationMode


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Roll angle lookup from precomputed polar data.")
    parser.add_argument("project", type=Path, help="Project folder containing PolarData/.")
    parser.add_argument(
        "--draft",
        choices=[c.value for c in DraftCategory],
        default=DraftCategory.DESIGN.value,
        help="Draft category folder.",
    )
    parser.add_argument("--gm", type=float, default=2.0, help="Metacentric height GM (m).")
    parser.add_argument("--hs", type=float, default=5.0, help="Significant wave height Hs (m).")
    parser.add_argument("--tz", type=float, default=10.0, help="Mean wave period Tz (s).")
    parser.add_argument("--heading", type=float, default=18.0, help="Vessel heading (deg from North).")
    parser.add_argument("--speed", type=float, default=12.0, help="Vessel speed (kn).")
    parser.add_argument("--wave-direction", type=float, default=130.0, help="Wave direction (deg).")
    parser.add_argument("--max-roll", type=float, default=20.0, help="Maximum allowed roll angle (deg).")
    parser.add_argument(
        "--direction-mode",
        choices=[m.value for m in DirectionMode],
        default=DirectionMode.NORTH_UP.value,
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in InterpolationMode],
        default=InterpolationMode.LEGACY.value,
        help="Interpolation mode.",
    )
    parser.add_argument("--save-case", metavar="ID", default=None, help="Store the condition as a saved case.")
    parser.add_argument(
        "--export-cases", type=Path, metavar="CSV", default=None, help="Write all saved cases to a CSV file."
    )
    parser.add_argument("--data-dir", type=Path, default=None, help="Folder for the log file and database.")
    parser.add_argument("--verbose", action="store_true", help="Also log to the console.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = Settings.for_project(args.project, data_dir=args.data_dir)
    init_logging(settings, console=args.verbose)

    db = None
    case_repo = None
    if args.save_case or args.export_cases:
        db = init_database(settings.db_path)()
        case_repo = SavedCaseRepository(db)

    session = PolarSession(
        LocalFileSystem(settings.project_root),
        polar_root=settings.polar_root,
        control_file_name=settings.control_file_name,
        interpolation_mode=InterpolationMode(args.mode),
        case_repository=case_repo,
    )
    try:
        return _run(args, session)
    finally:
        if db is not None:
            db.close()


def _run(args: argparse.Namespace, session: PolarSession) -> int:
    try:
        control = session.load_control_file()
        params = session.update_parameters(
            draft_category=DraftCategory(args.draft),
            gm_m=args.gm,
            hs_m=args.hs,
            tz_s=args.tz,
            heading_deg=args.heading,
            speed_kn=args.speed,
            wave_direction_deg=args.wave_direction,
            max_roll_angle_deg=args.max_roll,
        )
        dataset = session.load_dataset()
    except PolarDataError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    session.restore_cases()
    if args.save_case:
        try:
            session.save_case(args.save_case, include_dataset=False)
        except CaseValidationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    roll = session.current_roll()
    light = traffic_light(roll, params.max_roll_angle_deg)
    print(
        build_session_summary_text(
            control,
            session.parameters,
            dataset=dataset,
            roll_deg=roll,
            traffic_light=light.value,
            cases=session.saved_cases,
        )
    )
    beta = relative_wave_heading(params)
    display = convert_wave_direction(params.wave_direction_deg, params.heading_deg, DirectionMode(args.direction_mode))
    print(f"Relative wave heading: {beta:.0f} deg, display wave direction: {display:.0f} deg")
    if args.export_cases:
        export_cases_csv(args.export_cases, session.saved_cases)
        print(f"Exported {len(session.saved_cases)} case(s) to {args.export_cases}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
