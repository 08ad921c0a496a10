"""Plot queue sizes and terminal occupancy from a simulation history CSV."""
import click
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

QUEUE_COLUMNS = ["landing", "takeoff", "loading"]


def plot_history(history_df: pd.DataFrame):
    """Plot queue lengths and terminal occupancy over time.

    Args:
        history_df: per-tick history, as returned by tower_sim.simulation.simulate

    Returns:
        the matplotlib figure
    """
    occupancy_columns = [c for c in history_df.columns if c.endswith("_occupancy")]

    fig, (queue_ax, occupancy_ax) = plt.subplots(2, 1, figsize=(8, 6), sharex=True)

    queues = history_df[QUEUE_COLUMNS].reset_index().melt(
        id_vars="tick", var_name="queue", value_name="aircraft"
    )
    sns.lineplot(
        data=queues, x="tick", y="aircraft", hue="queue", drawstyle="steps-post",
        ax=queue_ax,
    )
    queue_ax.set_ylabel("Aircraft")

    if occupancy_columns:
        occupancy = history_df[occupancy_columns].reset_index().melt(
            id_vars="tick", var_name="terminal", value_name="occupancy"
        )
        occupancy["terminal"] = occupancy["terminal"].str.replace("_occupancy", "")
        sns.lineplot(
            data=occupancy, x="tick", y="occupancy", hue="terminal",
            drawstyle="steps-post", ax=occupancy_ax,
        )
    occupancy_ax.set_ylabel("Gates occupied (%)")
    occupancy_ax.set_ylim(0, 100)
    occupancy_ax.set_xlabel("Tick")

    fig.tight_layout()
    return fig


@click.command()
@click.argument("history_csv")
@click.option("--output", default=None, help="Image file to save instead of showing")
def plot_cmd(history_csv, output):
    history_df = pd.read_csv(history_csv, index_col="tick")
    fig = plot_history(history_df)
    if output is None:
        plt.show()
    else:
        fig.savefig(output)


if __name__ == "__main__":
    plot_cmd()
