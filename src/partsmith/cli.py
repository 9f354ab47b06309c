from __future__ import annotations

import importlib.util
import pathlib
import sys
import traceback
import warnings
from types import ModuleType
from typing import Callable

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from partsmith._config import get_printer_settings, get_unit_settings
from partsmith.diagnostics import warn_min_feature
from partsmith.io.stl import write_stl
from partsmith.mesh import analyze_mesh, combine_meshes
from partsmith.modeling.threading import (
    DEFAULT_FILL,
    DEFAULT_THREAD_ANGLE,
    DEFAULT_TRUNCATION,
    SCREW_DIAMETER_ADJUST,
    ThreadParams,
    generate_thread,
)
from partsmith.preview import PreviewBackendError, PyVistaPreviewer, collect_meshes

console = Console()
app = typer.Typer(help="Build, preview and export parametric printable parts.")


class ModelBuildError(RuntimeError):
    """Raised when a model module cannot provide a usable scene."""


def _load_module(path: pathlib.Path) -> ModuleType:
    module_name = "partsmith_user_model"
    if module_name in sys.modules:
        del sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise typer.BadParameter(f"Unable to import model at {path}")

    module = importlib.util.module_from_spec(spec)
    # Register module so features relying on sys.modules (e.g., dataclasses) work.
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def _scene_factory_from_module(model_path: pathlib.Path) -> Callable[[], object]:
    def factory() -> object:
        module = _load_module(model_path)
        builder = getattr(module, "build", None)
        if builder is None or not callable(builder):
            raise ModelBuildError(f"{model_path} must define a callable build() function.")
        return builder()

    return factory


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    n = 1
    while True:
        candidate = path.parent / f"{path.stem} ({n}){path.suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def _print_warnings(caught: list[warnings.WarningMessage]) -> None:
    for item in caught:
        console.print(f"[yellow]warning:[/yellow] {item.message}")


@app.command()
def preview(
    model: pathlib.Path = typer.Argument(..., help="Path to a Python module that defines build()."),
    watch: bool = typer.Option(True, help="Watch the model file for changes and hot-reload."),
    target_fps: int = typer.Option(30, min=1, max=240, help="Reload polling rate."),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Optional path to save a screenshot of the preview."
    ),
    show_edges: bool = typer.Option(False, "--show-edges/--hide-edges", help="Toggle triangle edge rendering."),
) -> None:
    """
    Build a model module and open an interactive PyVista preview window.
    """

    if not model.exists():
        raise typer.BadParameter(f"Model path {model} does not exist.")

    scene_factory = _scene_factory_from_module(model)
    try:
        initial_scene = scene_factory()
    except Exception as exc:
        if not watch:
            raise typer.BadParameter(f"Model execution failed: {exc}") from exc
        console.print(Panel.fit(_format_exception(exc), title="Initial build failed, watching for changes", style="red"))
        initial_scene = None

    console.rule("Partsmith Preview")
    console.print(f"Using model [green]{model}[/green]")
    if watch:
        console.print("[cyan]Watching for changes; save to hot reload, close the window to stop.[/cyan]")

    previewer = PyVistaPreviewer(console=console)
    console.print(f"[magenta]Units: {previewer.unit_name} ({previewer.unit_label}).[/magenta]")
    try:
        previewer.show(
            scene_factory=scene_factory,
            initial_scene=initial_scene,
            model_path=model,
            watch_files=watch,
            target_fps=target_fps,
            screenshot_path=screenshot,
            show_edges=show_edges,
        )
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def export(
    model: pathlib.Path = typer.Argument(..., help="Model module to export."),
    output: pathlib.Path = typer.Option(
        pathlib.Path("model.stl"),
        "--output",
        "-o",
        help="Path to the STL file that will be produced.",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing STL."),
    ascii: bool = typer.Option(False, "--ascii", help="Write ASCII STL instead of binary."),
) -> None:
    """
    Build the model, merge its meshes and save them as one STL file.
    """

    if not model.exists():
        raise typer.BadParameter(f"Model path {model} does not exist.")

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            scene = _scene_factory_from_module(model)()
            merged = combine_meshes(collect_meshes(scene))
        except (ModelBuildError, PreviewBackendError) as exc:
            raise typer.BadParameter(str(exc)) from exc
    _print_warnings(caught)

    analysis = analyze_mesh(merged)
    for issue in analysis.issues():
        console.print(f"[yellow]mesh:[/yellow] {issue}")

    final_output.parent.mkdir(parents=True, exist_ok=True)
    try:
        write_stl(merged, final_output, ascii=ascii)
    except OSError as exc:
        raise typer.BadParameter(f"Failed to export STL: {exc}") from exc

    units = get_unit_settings()
    mode = "ASCII" if ascii else "binary"
    console.print(
        Panel(
            f"Wrote {mode} STL ({merged.n_faces} triangles) to [green]{final_output}[/green]. "
            f"Units: {units.name} ({units.label}).",
            title="Export complete",
            border_style="green",
        )
    )


@app.command("thread-info")
def thread_info(
    diameter: float = typer.Argument(..., help="Nominal diameter (mm)."),
    pitch: float = typer.Argument(..., help="Axial distance per turn (mm)."),
    length: float = typer.Argument(..., help="Threaded length (mm)."),
    segments_per_turn: int = typer.Option(32, "--segments", "-s", min=3, help="Slices per full turn."),
    diameter_adjust: float = typer.Option(SCREW_DIAMETER_ADJUST, "--adjust", help="Signed clearance offset (mm)."),
    truncation: float = typer.Option(DEFAULT_TRUNCATION, help="Material removed from the crest (mm)."),
    fill: float = typer.Option(DEFAULT_FILL, help="Material added into the root (mm)."),
    thread_angle: float = typer.Option(DEFAULT_THREAD_ANGLE, "--angle", help="Included flank angle (degrees)."),
    lead_top: bool = typer.Option(False, "--lead-top", help="Recess the top end."),
    lead_bottom: bool = typer.Option(False, "--lead-bottom", help="Recess the bottom end."),
) -> None:
    """
    Print the derived geometry of a thread and any plausibility warnings.
    """

    params = ThreadParams(
        diameter=diameter,
        pitch=pitch,
        length=length,
        segments_per_turn=segments_per_turn,
        diameter_adjust=diameter_adjust,
        thread_angle_deg=thread_angle,
        truncation=truncation,
        fill=fill,
        lead_top=lead_top,
        lead_bottom=lead_bottom,
    )
    printer = get_printer_settings()
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        thread = generate_thread(params)
        warn_min_feature("profile depth", params.profile_depth, printer.nozzle_diameter)

    table = Table(title=f"Thread {diameter:g} x {pitch:g} x {length:g}")
    table.add_column("Quantity")
    table.add_column("Value", justify="right")
    rows = [
        ("thread height", f"{params.thread_height:.4f} mm"),
        ("profile depth", f"{params.profile_depth:.4f} mm"),
        ("outer radius", f"{params.outer_radius:.4f} mm"),
        ("inner radius", f"{params.inner_radius:.4f} mm"),
        ("step count", str(params.step_count)),
        ("degrees per step", f"{params.deg_step:.4f}"),
        ("rise per step", f"{params.step_up:.5f} mm"),
        ("lead segments", str(params.end_segment_count)),
        ("slices", str(thread.slice_count)),
        ("faces", str(len(thread.faces))),
    ]
    for name, value in rows:
        table.add_row(name, value)
    console.print(table)
    _print_warnings(caught)
