"""Run a control tower for many ticks and record what happened."""
import logging

import pandas as pd
import tqdm

from tower_sim.tower import ControlTower

logger = logging.getLogger("Simulation")


def simulate(tower: ControlTower, num_ticks: int, progress: bool = False) -> pd.DataFrame:
    """Advance the tower by a number of ticks.

    Args:
        tower: The control tower to advance. Modified in place.
        num_ticks: The number of ticks to run.
        progress: Whether to show a progress bar.

    Returns:
        a dataframe with one row per tick, holding the tower snapshot taken after
        that tick (see ControlTower.snapshot)
    """
    if num_ticks < 0:
        raise ValueError("number of ticks must be non-negative")

    records = []
    for _ in tqdm.trange(num_ticks, disable=not progress, desc="Ticks"):
        tower.tick()
        records.append(tower.snapshot())

    logger.info(f"simulated {num_ticks} ticks, now at tick {tower.ticks_elapsed}")
    return history_to_dataframe(records)


def history_to_dataframe(records: list[dict]) -> pd.DataFrame:
    """Collect tower snapshots into a dataframe indexed by tick."""
    if not records:
        return pd.DataFrame(
            columns=["landing", "takeoff", "loading", "num_aircraft", "emergencies"],
            index=pd.Index([], name="tick"),
        )
    return pd.DataFrame.from_records(records).set_index("tick")
