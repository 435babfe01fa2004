from __future__ import annotations

import argparse
import logging
from typing import Optional

from .errors import LayoutError
from .layout import Layout, assemble_layout, disassemble_layout, sorted_sections, total_seats
from .policy import LayoutPolicy
from .render import render_ascii
from .seats import generate_seats
from .specs import SeatClassSpec, SpaceSpec
from .storage import load_layout, maybe_init_layout, save_layout
from .validation import ValidationResult, validate_configuration


DEFAULT_FILE = "seat_map.json"
ENTITIES = {"aircraft": "aircraft", "aircraft-type": "aircraft type"}

logger = logging.getLogger(__name__)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--file",
        default=DEFAULT_FILE,
        help=f"Path to seat map JSON file (default: {DEFAULT_FILE})",
    )
    p.add_argument(
        "--entity",
        choices=sorted(ENTITIES),
        default="aircraft",
        help="Which limits apply (read from SEATMAP_MAX_* environment variables)",
    )


def _policy(args: argparse.Namespace) -> LayoutPolicy:
    return LayoutPolicy.from_env(entity=ENTITIES[args.entity])


def _print_errors(result: ValidationResult) -> None:
    for key, err in result.field_errors.items():
        print(f"  {key}: {err.message} [{err.code.value}]")
    for err in result.global_errors:
        print(f"  {err.message} [{err.code.value}]")


def _commit(
    args: argparse.Namespace,
    seat_classes: list[SeatClassSpec],
    spaces: list[SpaceSpec],
) -> Optional[Layout]:
    result = validate_configuration(seat_classes, spaces, _policy(args))
    if not result.valid:
        print("Seat map not saved, validation failed:")
        _print_errors(result)
        return None
    layout = assemble_layout(seat_classes, spaces)
    save_layout(layout, args.file)
    return layout


def cmd_init(args: argparse.Namespace) -> int:
    layout = maybe_init_layout(args.file, overwrite=args.overwrite)
    print(f"Initialized seat map at {args.file} ({len(layout)} sections, {total_seats(layout)} seats)")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    print(render_ascii(layout, cell_width=args.width))
    return 0


def cmd_seats(args: argparse.Namespace) -> int:
    seats = generate_seats(args.from_row, args.to_row, args.pattern)
    print(" ".join(s.seat_code for s in seats))
    print(f"{len(seats)} seats")
    return 0


def cmd_add_class(args: argparse.Namespace) -> int:
    seat_classes, spaces = disassemble_layout(load_layout(args.file))
    seat_classes.append(SeatClassSpec(args.name, args.from_row, args.to_row, args.pattern))
    if _commit(args, seat_classes, spaces) is None:
        return 2
    print(f"Added seat class {args.name!r} rows {args.from_row}-{args.to_row} ({args.pattern})")
    return 0


def cmd_add_space(args: argparse.Namespace) -> int:
    seat_classes, spaces = disassemble_layout(load_layout(args.file))
    spaces.append(SpaceSpec(args.label, args.row))
    if _commit(args, seat_classes, spaces) is None:
        return 2
    print(f"Added space {args.label!r} at row {args.row}")
    return 0


def cmd_remove(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    if args.key not in layout:
        raise LayoutError(f"no section named {args.key!r}")
    del layout[args.key]
    # spaces are renumbered on reassembly
    seat_classes, spaces = disassemble_layout(layout)
    if _commit(args, seat_classes, spaces) is None:
        return 2
    print(f"Removed section {args.key!r}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    seat_classes, spaces = disassemble_layout(load_layout(args.file))
    result = validate_configuration(seat_classes, spaces, _policy(args))
    if result.valid:
        print("Seat map is valid")
        return 0
    print("Seat map is not valid:")
    _print_errors(result)
    return 1


def cmd_summary(args: argparse.Namespace) -> int:
    layout = load_layout(args.file)
    for key, section in sorted_sections(layout):
        rows = f"{section.get('fromRow')}-{section.get('toRow')}"
        if section.get("type") == "space":
            print(f"{key:<12} space  {rows:<7} {section.get('label')}")
        else:
            print(f"{key:<12} class  {rows:<7} {section.get('pattern')} ({len(section.get('seats', []))} seats)")
    print(f"Total seats: {total_seats(layout)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seatmap", description="Aircraft seat map layout tool (CLI).")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_init = sub.add_parser("init", help="Create a seat map JSON file with the default cabin")
    _add_common_args(p_init)
    p_init.add_argument("--overwrite", action="store_true", help="Overwrite existing seat map file")
    p_init.set_defaults(func=cmd_init)

    p_show = sub.add_parser("show", help="Print the seat map")
    _add_common_args(p_show)
    p_show.add_argument("--width", type=int, default=3, help="Cell width for display")
    p_show.set_defaults(func=cmd_show)

    p_seats = sub.add_parser("seats", help="Preview the seats a row range and pattern produce")
    p_seats.add_argument("--from-row", type=int, required=True)
    p_seats.add_argument("--to-row", type=int, required=True)
    p_seats.add_argument("--pattern", required=True)
    p_seats.set_defaults(func=cmd_seats)

    p_class = sub.add_parser("add-class", help="Add a seat class")
    _add_common_args(p_class)
    p_class.add_argument("--name", required=True)
    p_class.add_argument("--from-row", type=int, required=True)
    p_class.add_argument("--to-row", type=int, required=True)
    p_class.add_argument("--pattern", required=True, help="Seat groups per row, e.g. 3-4-3")
    p_class.set_defaults(func=cmd_add_class)

    p_space = sub.add_parser("add-space", help="Add a single-row space (galley, toilet, ...)")
    _add_common_args(p_space)
    p_space.add_argument("--label", required=True)
    p_space.add_argument("--row", type=int, required=True)
    p_space.set_defaults(func=cmd_add_space)

    p_remove = sub.add_parser("remove", help="Remove a section by key")
    _add_common_args(p_remove)
    p_remove.add_argument("--key", required=True)
    p_remove.set_defaults(func=cmd_remove)

    p_validate = sub.add_parser("validate", help="Check the seat map against the layout limits")
    _add_common_args(p_validate)
    p_validate.set_defaults(func=cmd_validate)

    p_summary = sub.add_parser("summary", help="List sections and seat counts")
    _add_common_args(p_summary)
    p_summary.set_defaults(func=cmd_summary)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    try:
        return int(args.func(args))
    except LayoutError as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
