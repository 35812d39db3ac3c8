#!/usr/bin/env python3
"""Generate smeared collision vertices in bulk and store them as a TFS table.

Usage:
    python -m betafunc_vertex.generate --config beamspot.json --events 10000 --output vtx.tfs
    python -m betafunc_vertex.generate --conditions beamspot.tfs --run 1 --lumi 4 --output vtx.tfs
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import asdict
from pathlib import Path

import pandas as pd
import tfs
from tqdm import tqdm

from betafunc_vertex.conditions.source import BeamSpotConditions
from betafunc_vertex.config import VertexSmearingConfig, load_config
from betafunc_vertex.model import BeamVertexModel, VertexSample
from betafunc_vertex.random_source import NumpyGaussianSource

LOGGER = logging.getLogger(__name__)

VERTEX_COLUMNS: tuple[str, ...] = VertexSample._fields


def generate_vertices(
    model: BeamVertexModel,
    n_events: int,
    seed: int | None = None,
    show_progress: bool = False,
) -> pd.DataFrame:
    """
    Draw the vertices of ``n_events`` events from the current beam spot.

    Args:
        model: Configured vertex model
        n_events: Number of events to generate
        seed: Seed for the random stream owned by this call
        show_progress: Display a progress bar

    Returns:
        DataFrame with one row per event and columns x, y, z, t (mm).
    """
    if n_events < 0:
        raise ValueError(f"Number of events must not be negative, got {n_events}")
    source = NumpyGaussianSource(seed)
    samples = [
        model.sample(source)
        for _ in tqdm(range(n_events), desc="Generating vertices", disable=not show_progress)
    ]
    LOGGER.info(f"Generated {len(samples)} vertices")
    return pd.DataFrame(samples, columns=list(VERTEX_COLUMNS))


def to_tfs(vertices: pd.DataFrame, model: BeamVertexModel) -> tfs.TfsDataFrame:
    """Attach the beam-spot parameters of ``model`` as headers of the vertex table."""
    headers = {name.upper(): value for name, value in asdict(model.parameters).items()}
    return tfs.TfsDataFrame(vertices, headers=headers)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Beta-function vertex smearing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--config", type=Path, help="JSON file with the static configuration")
    source.add_argument("--conditions", type=Path, help="TFS table of beam-spot conditions")
    parser.add_argument("--run", type=int, default=1, help="Run number for --conditions (default 1)")
    parser.add_argument("--lumi", type=int, default=1, help="Luminosity block for --conditions (default 1)")
    parser.add_argument("--events", type=int, default=1000, help="Number of events (default 1000)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (optional)")
    parser.add_argument("--output", type=Path, required=True, help="Output TFS file")
    parser.add_argument("--verbose", action="store_true", help="Show progress output")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
    )

    if args.config is not None:
        model = BeamVertexModel(load_config(args.config))
    else:
        model = BeamVertexModel(VertexSmearingConfig(read_db=True))
        model.update(BeamSpotConditions.from_tfs(args.conditions), args.run, args.lumi)

    vertices = generate_vertices(model, args.events, seed=args.seed, show_progress=args.verbose)
    tfs.write(args.output, to_tfs(vertices, model))
    LOGGER.info(f"Saved {len(vertices)} vertices to {args.output}")


if __name__ == "__main__":
    main()
