# Copyright (c) 2025 Daniele De Sensi e Saverio Pasqualoni
# Licensed under the MIT License

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from plotnine import aes, coord_flip, ggplot, labs, position_dodge, scale_color_manual, theme_bw

from .data import DrawsEmptyError, INTERVAL_FUNCTIONS, POINT_FUNCTIONS, point_interval, read_draws
from .geoms import geom_pointinterval
from .utils import ensure_dir, format_width

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlotConfig:
    value: str
    by: str
    color_by: str | None = None
    horizontal: bool = False
    title: str | None = None
    dodge_width: float = 0.5
    output_dir: str | Path | None = None

    def output_path(self) -> Path:
        target_dir = ensure_dir(self.output_dir or Path("plots"))
        return target_dir / f"{self.value}_by_{self.by}_pointinterval.png"


def _split_list(value: str | None) -> list[str] | None:
    if value is None:
        return None
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def _split_widths(value: str) -> list[float]:
    try:
        return [float(item) for item in _split_list(value) or []]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid width list {value!r}") from exc


def build_plot(summary: pd.DataFrame, cfg: PlotConfig) -> ggplot:
    """
    Compose the ggplot for a ``point_interval`` summary.
    """
    mapping = aes(x=cfg.by, y=cfg.value)
    if cfg.color_by:
        mapping = aes(x=cfg.by, y=cfg.value, color=cfg.color_by)
        position = position_dodge(width=cfg.dodge_width)
    else:
        position = "identity"

    # Categorical axes even for numeric group labels
    categorical = [cfg.by, cfg.color_by] if cfg.color_by else [cfg.by]
    summary = summary.assign(**{col: summary[col].astype(str) for col in categorical})

    plot = ggplot(summary, mapping) + geom_pointinterval(position=position) + theme_bw()

    if cfg.color_by:
        levels = sorted(summary[cfg.color_by].unique())
        palette = sns.color_palette("tab10", n_colors=len(levels)).as_hex()
        plot = plot + scale_color_manual(values=dict(zip(levels, palette)))
    if cfg.horizontal:
        plot = plot + coord_flip()

    widths = ", ".join(format_width(w) for w in sorted(summary["width"].unique()))
    caption = f"{summary['point'].iloc[0]} with {widths} {summary['interval'].iloc[0]}"
    return plot + labs(title=cfg.title or f"{cfg.value} by {cfg.by}", caption=caption)


def generate_pointinterval_plot(summary: pd.DataFrame, cfg: PlotConfig) -> Path:
    """
    Render ``summary`` with ``geom_pointinterval`` and save it as a PNG.
    """
    if summary.empty:
        raise DrawsEmptyError("No summary rows to plot.")

    fig = build_plot(summary, cfg).draw()
    full_path = cfg.output_path()
    fig.savefig(full_path, dpi=300, bbox_inches="tight")
    plt.close(fig)
    logger.info("Wrote %s", full_path)
    return full_path


def _summarize_args(args) -> pd.DataFrame:
    draws = read_draws(args.draws_file)
    by = _split_list(args.by)
    return point_interval(
        draws,
        args.value,
        by=by,
        width=args.width,
        point=args.point,
        interval=args.interval,
    )


def _summarize_command(args) -> None:
    summary = _summarize_args(args)
    output = Path(args.output)
    ensure_dir(output.parent)
    summary.to_csv(output, index=False)
    logger.info("Wrote %d summary rows to %s", len(summary), output)


def _plot_command(args) -> None:
    by = _split_list(args.by)
    if not by:
        raise ValueError("--by needs a column name.")
    if args.color_by:
        args.by = f"{by[0]},{args.color_by}"
    summary = _summarize_args(args)
    cfg = PlotConfig(
        value=args.value,
        by=by[0],
        color_by=args.color_by,
        horizontal=args.horizontal,
        title=args.title,
        output_dir=args.output_dir,
    )
    generate_pointinterval_plot(summary, cfg)


def _add_summary_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--draws-file", required=True, help="CSV file with one sample draw per row.")
    parser.add_argument("--value", required=True, help="Column holding the draws to summarize.")
    parser.add_argument(
        "--width",
        type=_split_widths,
        default=[0.66, 0.95],
        help="Comma separated interval widths (default: 0.66,0.95).",
    )
    parser.add_argument(
        "--point",
        choices=sorted(POINT_FUNCTIONS),
        default="median",
        help="Point estimate (default: median).",
    )
    parser.add_argument(
        "--interval",
        choices=sorted(INTERVAL_FUNCTIONS),
        default="qi",
        help="Interval type (default: qi).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Point + interval summaries and plots of sample draws.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    summarize_parser = subparsers.add_parser("summarize", help="Write point + interval summaries to CSV.")
    _add_summary_arguments(summarize_parser)
    summarize_parser.add_argument("--by", help="Comma separated grouping columns.")
    summarize_parser.add_argument("--output", required=True, help="Destination CSV file.")
    summarize_parser.set_defaults(func=_summarize_command)

    plot_parser = subparsers.add_parser("plot", help="Generate a point + interval plot.")
    _add_summary_arguments(plot_parser)
    plot_parser.add_argument("--by", required=True, help="Column placed on the categorical axis.")
    plot_parser.add_argument("--color-by", help="Second grouping column, dodged and coloured.")
    plot_parser.add_argument("--horizontal", action="store_true", help="Draw intervals horizontally.")
    plot_parser.add_argument("--title", help="Override the plot title.")
    plot_parser.add_argument("--output-dir", help="Directory where figures are written.")
    plot_parser.set_defaults(func=_plot_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except (DrawsEmptyError, ValueError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
