import matplotlib.pyplot as plt

from tracking_error.analysis import error_sweep
from tracking_error.plots import plot_error_sweep, plot_simulation, plot_zoom
from tracking_error.simulator import simulate


def test_constant_velocity_axis_ranges():
    result = simulate("constant_velocity", error=3, rng=0)
    fig = plot_simulation(result)
    ax_pos, ax_vel, ax_acc = fig.axes
    assert ax_pos.get_ylim() == (0.0, 1200.0)
    assert ax_vel.get_ylim() == (-8.0, 12.0)
    assert ax_acc.get_ylim() == (-10.0, 10.0)
    plt.close(fig)


def test_constant_acceleration_axis_ranges():
    fig = plot_simulation(simulate("constant_acceleration", error=3, rng=0))
    ax_pos, ax_vel, ax_acc = fig.axes
    assert ax_pos.get_ylim() == (0.0, 3600.0)
    assert ax_vel.get_ylim() == (-5.0, 15.0)
    plt.close(fig)


def test_plots_are_saved(tmp_path):
    result = simulate(error=1, rng=1)
    plot_simulation(result, tmp_path / "sim.png")
    plot_zoom(result, output_path=tmp_path / "zoom.png")
    plot_error_sweep(error_sweep(errors=[0.0, 1.0], n_runs=3, rng=0), tmp_path / "sweep.png")
    assert (tmp_path / "sim.png").exists()
    assert (tmp_path / "zoom.png").exists()
    assert (tmp_path / "sweep.png").exists()


def test_unsaved_figure_stays_open_unless_closed():
    result = simulate(error=1, rng=2)
    kept = plot_simulation(result)
    assert kept.number in plt.get_fignums()
    plt.close(kept)
    closed = plot_simulation(result, close=True)
    assert closed.number not in plt.get_fignums()
    assert plot_zoom(result, close=True).number not in plt.get_fignums()
