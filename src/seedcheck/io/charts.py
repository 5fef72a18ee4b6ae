"""Bucket histogram charts."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import plotly.graph_objects as go

from seedcheck.validation.buckets import BucketComparison


def bucket_chart(comparison: BucketComparison) -> go.Figure:
    """Bar chart of observed bucket counts against the tolerance band."""
    labels = comparison.labels
    colors = np.where(comparison.failing, "rgb(239, 85, 59)", "rgb(99, 110, 250)")

    fig = go.Figure()

    # Tolerance band
    fig.add_trace(
        go.Scatter(
            x=labels + labels[::-1],
            y=np.concatenate(
                [
                    comparison.expected + comparison.tolerance,
                    (comparison.expected - comparison.tolerance)[::-1],
                ]
            ),
            fill="toself",
            fillcolor="rgba(128, 128, 128, 0.2)",
            line=dict(color="rgba(128, 128, 128, 0)"),
            name="Tolerance",
        )
    )

    fig.add_trace(
        go.Bar(
            x=labels,
            y=comparison.observed,
            marker_color=list(colors),
            name="Observed",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=labels,
            y=comparison.expected,
            mode="lines",
            line=dict(color="gray", width=1, dash="dash"),
            name="Expected",
        )
    )

    fig.update_layout(
        title=f"{comparison.check}: {comparison.n_failing} of {len(labels)} buckets out of tolerance",
        xaxis_title="Bucket",
        yaxis_title="Count",
        bargap=0.05,
    )
    return fig


def write_charts(comparisons: dict[str, BucketComparison], directory: Path) -> list[Path]:
    """Write one standalone HTML chart per check into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    written = []
    for check, comparison in comparisons.items():
        path = directory / f"{check}.html"
        bucket_chart(comparison).write_html(path, include_plotlyjs="cdn")
        written.append(path)
    return written
