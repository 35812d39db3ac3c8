"""
In-memory store of simulated beam-spot conditions.

Records are keyed by the run/luminosity-block interval over which they are
valid and can be read from (and written to) TFS tables with one row per
interval.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pandas as pd
import tfs

from betafunc_vertex.conditions.records import SimBeamSpotRecord, ValidityInterval
from betafunc_vertex.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

LOGGER = logging.getLogger(__name__)

INTERVAL_COLUMNS: tuple[str, ...] = ("RUN_FIRST", "LUMI_FIRST", "RUN_LAST", "LUMI_LAST")

# TFS column -> record attribute
RECORD_COLUMNS: dict[str, str] = {
    "X": "x",
    "Y": "y",
    "Z": "z",
    "SIGMAZ": "sigma_z",
    "BETASTAR": "beta_star",
    "EMITTANCE": "emittance",
    "ALPHA": "alpha",
    "PHI": "phi",
    "TIMEOFFSET": "time_offset",
}
GAUSSIAN_COLUMN = "GAUSSIAN"


class BeamSpotConditions:
    """Beam-spot records with non-overlapping validity intervals."""

    def __init__(self, entries: Iterable[tuple[ValidityInterval, SimBeamSpotRecord]] = ()):
        self._entries: list[tuple[ValidityInterval, SimBeamSpotRecord]] = []
        for interval, record in entries:
            self.add(interval, record)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[ValidityInterval, SimBeamSpotRecord]]:
        return iter(self._entries)

    def add(self, interval: ValidityInterval, record: SimBeamSpotRecord) -> None:
        """Register ``record`` as valid over ``interval``."""
        for existing, _ in self._entries:
            if not (
                (interval.last_run, interval.last_lumi) < (existing.first_run, existing.first_lumi)
                or (existing.last_run, existing.last_lumi) < (interval.first_run, interval.first_lumi)
            ):
                raise ValueError(f"Validity interval {interval} overlaps {existing}")
        self._entries.append((interval, record))
        self._entries.sort(key=lambda entry: entry[0])

    def lookup(self, run: int, lumi: int) -> tuple[ValidityInterval, SimBeamSpotRecord]:
        """
        Find the record valid for a luminosity block.

        Args:
            run: Run number
            lumi: Luminosity block number within the run

        Returns:
            The validity interval and the record valid over it.
        """
        for interval, record in self._entries:
            if interval.contains(run, lumi):
                return interval, record
        raise ConfigurationError(f"No beam-spot conditions valid for run {run}, lumi {lumi}")

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> BeamSpotConditions:
        """Build the store from a table with one row per validity interval."""
        missing = set(INTERVAL_COLUMNS) | set(RECORD_COLUMNS) | {GAUSSIAN_COLUMN}
        missing -= set(df.columns)
        if missing:
            raise KeyError(f"Missing columns in beam-spot conditions: {sorted(missing)}")

        conditions = cls()
        for row in df.itertuples(index=False):
            values = row._asdict()
            interval = ValidityInterval(*(int(values[col]) for col in INTERVAL_COLUMNS))
            record = SimBeamSpotRecord(
                **{attr: float(values[col]) for col, attr in RECORD_COLUMNS.items()},
                is_gaussian=bool(values[GAUSSIAN_COLUMN]),
            )
            conditions.add(interval, record)
        LOGGER.debug(f"Loaded {len(conditions)} beam-spot records")
        return conditions

    def to_dataframe(self) -> pd.DataFrame:
        rows = []
        for interval, record in self._entries:
            row = dict(
                zip(
                    INTERVAL_COLUMNS,
                    (interval.first_run, interval.first_lumi, interval.last_run, interval.last_lumi),
                )
            )
            row.update({col: getattr(record, attr) for col, attr in RECORD_COLUMNS.items()})
            row[GAUSSIAN_COLUMN] = int(record.is_gaussian)
            rows.append(row)
        return pd.DataFrame(rows, columns=[*INTERVAL_COLUMNS, *RECORD_COLUMNS, GAUSSIAN_COLUMN])

    @classmethod
    def from_tfs(cls, path: str | Path) -> BeamSpotConditions:
        LOGGER.info(f"Reading beam-spot conditions from {path}")
        return cls.from_dataframe(tfs.read(path))

    def write_tfs(self, path: str | Path) -> None:
        tfs.write(path, tfs.TfsDataFrame(self.to_dataframe()))
        LOGGER.info(f"Saved {len(self)} beam-spot records to {path}")
