"""Run the control tower simulation from a save directory."""
import logging

import click

from tower_sim.config import LANDING_TICK_PARITY
from tower_sim.saves import load_save_directory, write_save_directory
from tower_sim.simulation import simulate


def run(save_dir, ticks, output_dir, history, landing_parity, progress=True):
    tower = load_save_directory(save_dir, landing_parity=landing_parity)
    print(f"Loaded {tower}")

    history_df = simulate(tower, ticks, progress=progress)
    print(f"After {ticks} ticks: {tower}")
    print(tower.landing_queue)
    print(tower.takeoff_queue)
    for terminal in tower.terminals:
        print(f"{terminal}: {terminal.calculate_occupancy_level()}% occupied")

    if output_dir is not None:
        write_save_directory(tower, output_dir)
        print(f"Saved to {output_dir}")

    if history is not None:
        history_df.to_csv(history)
        print(f"Wrote tick history to {history}")


@click.command()
@click.option("--save-dir", default="saves/basic", help="Directory to load a save from")
@click.option("--ticks", default=20, help="Number of ticks to simulate")
@click.option("--output-dir", default=None, help="Directory to write the final save to")
@click.option("--history", default=None, help="CSV file to write per-tick history to")
@click.option(
    "--landing-parity",
    default=LANDING_TICK_PARITY,
    type=click.IntRange(0, 1),
    help="Tick parity on which aircraft try to land first",
)
@click.option("--verbose", is_flag=True, help="Log every scheduling decision")
def run_cmd(save_dir, ticks, output_dir, history, landing_parity, verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    run(save_dir, ticks, output_dir, history, landing_parity, progress=not verbose)


if __name__ == "__main__":
    run_cmd()
