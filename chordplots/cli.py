"""
chordplots/cli.py - Command-line interface.

Subcommands:
    layout     Compute a chord layout from a labelled square matrix CSV and
               print it as JSON (or write it with --output).
    order      Print the labels in circle order, one per line.
    aggregate  Build a co-occurrence matrix CSV from an observation table.

Usage:
    chordplots layout matrix.csv --groups V=4 D=3 J=2 --sort-by value
    chordplots order matrix.csv --groups V=4 D=3 J=2
    chordplots order matrix.csv --fixed-order j1,v1,v2
    chordplots aggregate calls.csv --columns V_call D_call J_call -o m.csv

The matrix CSV has labels in its header row and first column, in the same
order. Without --groups every label goes into a single group named 'all'.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys

import pandas as pd

from chordplots.config import LayoutConfig, SortBy
from chordplots.data.builders import cooccurrence_matrix
from chordplots.data.cooccurrence import CoOccurrenceMatrix
from chordplots.errors import ChordPlotsError, ConfigurationError, DimensionError, DomainError
from chordplots.layout.order import label_order
from chordplots.pipeline import build_chord_layout


# ── Logging setup ─────────────────────────────────────────────────────────────

def _setup_logging(level: str = "WARNING") -> None:
    """Configure root logger with timestamps and level names on stderr."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    fmt = "%(asctime)s  %(levelname)-8s  %(name)s - %(message)s"
    logging.basicConfig(level=numeric, format=fmt, datefmt="%H:%M:%S", stream=sys.stderr)


logger = logging.getLogger("chordplots.cli")


# ── Input helpers ─────────────────────────────────────────────────────────────

def _parse_groups(specs: list[str] | None) -> tuple[list[str], list[int]] | None:
    """Parse ['V=3', 'J=2'] into (['V', 'J'], [3, 2])."""
    if not specs:
        return None
    names: list[str] = []
    sizes: list[int] = []
    for entry in specs:
        name, sep, size = entry.partition("=")
        if not sep or not name:
            raise ConfigurationError(
                f"--groups entries must look like NAME=SIZE; got {entry!r}",
                field="groups",
                value=entry,
            )
        try:
            sizes.append(int(size))
        except ValueError:
            raise ConfigurationError(
                f"Group size must be an integer; got {entry!r}",
                field="groups",
                value=entry,
            ) from None
        names.append(name)
    return names, sizes


def load_matrix_csv(path: str, group_specs: list[str] | None = None) -> CoOccurrenceMatrix:
    """Load a labelled square matrix CSV into a CoOccurrenceMatrix."""
    df = pd.read_csv(path, index_col=0)
    row_labels = [str(label) for label in df.index]
    col_labels = [str(label) for label in df.columns]
    if row_labels != col_labels:
        raise DimensionError(
            f"{path}: row labels and column labels must match in the same order",
            field="labels",
            value=path,
        )

    groups = _parse_groups(group_specs)
    if groups is None:
        groups = (["all"], [len(col_labels)])
    names, sizes = groups

    try:
        matrix = df.to_numpy(dtype=float)
    except ValueError:
        raise DomainError(
            f"{path}: every matrix cell must be numeric",
            field="matrix",
            value=path,
        ) from None

    logger.info("Loaded %d×%d matrix from %s.", len(row_labels), len(col_labels), path)
    return CoOccurrenceMatrix.from_group_sizes(matrix, col_labels, names, sizes)


def _fixed_order(args: argparse.Namespace) -> list[str] | None:
    if not args.fixed_order:
        return None
    return [s.strip() for s in args.fixed_order.split(",") if s.strip()]


def _layout_config(args: argparse.Namespace) -> LayoutConfig:
    return LayoutConfig(
        inner_radius=args.inner_radius,
        outer_radius=args.outer_radius,
        gap_fraction=args.gap_fraction,
        arc_scale=args.arc_scale,
        start_angle=math.radians(args.start_angle_deg),
        direction=-1 if args.clockwise else 1,
        sort_by=args.sort_by,
        fixed_order=_fixed_order(args),
        ribbon_width_power=args.power,
    )


def _emit(text: str, output: str | None) -> None:
    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
        logger.info("Wrote %s", output)
    else:
        print(text)


# ── Subcommands ───────────────────────────────────────────────────────────────

def cmd_layout(args: argparse.Namespace) -> int:
    """Compute and export a layout."""
    model = load_matrix_csv(args.matrix, args.groups)
    result = build_chord_layout(
        model,
        _layout_config(args),
        top_n_entities=args.top_n_entities,
        min_entity_flow=args.min_entity_flow,
        min_ribbon_value=args.min_ribbon_value,
        top_n_ribbons=args.top_n_ribbons,
        by_magnitude=args.by_magnitude,
    )

    payload = result.layout.to_dict()
    payload["labels"] = list(result.model.labels)
    payload["groups"] = [
        {"name": g.name, "start": g.indices.start, "stop": g.indices.stop}
        for g in result.model.groups
    ]
    payload["order"] = list(result.order)
    _emit(json.dumps(payload, indent=2), args.output)
    return 0


def cmd_order(args: argparse.Namespace) -> int:
    """Print labels in circle order."""
    model = load_matrix_csv(args.matrix, args.groups)
    for label in label_order(model, args.sort_by, _fixed_order(args)):
        print(label)
    return 0


def cmd_aggregate(args: argparse.Namespace) -> int:
    """Observation table → labelled co-occurrence matrix CSV."""
    df = pd.read_csv(args.table)
    model = cooccurrence_matrix(df, args.columns)
    out = pd.DataFrame(model.matrix, index=model.labels, columns=model.labels)
    _emit(out.to_csv(), args.output)

    sizes = " ".join(f"{g.name}={len(g)}" for g in model.groups)
    logger.info("Group sizes for --groups: %s", sizes)
    return 0


# ── Argument parsing ──────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chordplots",
        description="Chord diagram layout from co-occurrence matrices.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_matrix_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument("matrix", metavar="MATRIX_CSV", help="Labelled square matrix CSV")
        p.add_argument(
            "--groups", nargs="+", metavar="NAME=SIZE", default=None,
            help="Consecutive group blocks, e.g. V=4 D=3 J=2 (default: one group)",
        )
        p.add_argument(
            "--sort-by", default=SortBy.GROUP.value,
            choices=[m.value for m in SortBy],
            help="Arc order policy (default: group)",
        )
        p.add_argument(
            "--fixed-order", default=None, metavar="LABELS",
            help="Comma-separated labels in circle order (overrides --sort-by)",
        )

    # layout
    p_layout = subparsers.add_parser("layout", help="Compute a layout and export it as JSON")
    add_matrix_flags(p_layout)
    p_layout.add_argument("--inner-radius", type=float, default=0.92)
    p_layout.add_argument("--outer-radius", type=float, default=1.0)
    p_layout.add_argument("--gap-fraction", type=float, default=0.05)
    p_layout.add_argument("--arc-scale", type=float, default=1.0)
    p_layout.add_argument(
        "--start-angle-deg", type=float, default=90.0,
        help="Start angle in degrees (0 = right, 90 = top; default: 90)",
    )
    p_layout.add_argument("--clockwise", action="store_true", help="Place arcs clockwise")
    p_layout.add_argument(
        "--power", type=float, default=1.0,
        help="Ribbon width exponent (default: 1.0, linear)",
    )
    p_layout.add_argument("--top-n-entities", type=int, default=None, metavar="N")
    p_layout.add_argument("--min-entity-flow", type=float, default=None, metavar="X")
    p_layout.add_argument("--min-ribbon-value", type=float, default=None, metavar="X")
    p_layout.add_argument("--top-n-ribbons", type=int, default=None, metavar="N")
    p_layout.add_argument(
        "--by-magnitude", action="store_true",
        help="Ribbon filters compare |value| (for signed matrices)",
    )
    p_layout.add_argument("-o", "--output", default=None, metavar="PATH")
    p_layout.set_defaults(func=cmd_layout)

    # order
    p_order = subparsers.add_parser("order", help="Print labels in circle order")
    add_matrix_flags(p_order)
    p_order.set_defaults(func=cmd_order)

    # aggregate
    p_agg = subparsers.add_parser(
        "aggregate", help="Build a co-occurrence matrix CSV from an observation table",
    )
    p_agg.add_argument("table", metavar="TABLE_CSV")
    p_agg.add_argument("--columns", nargs="+", required=True, metavar="COL")
    p_agg.add_argument("-o", "--output", default=None, metavar="PATH")
    p_agg.set_defaults(func=cmd_aggregate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)
    try:
        return args.func(args)
    except ChordPlotsError as exc:
        logger.error("%s", exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
