from __future__ import annotations

import math
import queue
import threading
from pathlib import Path
from typing import Callable, Iterable, List

from rich.console import Console
from rich.panel import Panel
from watchfiles import Change, watch

from partsmith._config import UnitSettings, get_unit_settings
from partsmith.mesh import Mesh, mesh_to_pyvista
from partsmith.modeling.group import MeshGroup

SceneFactory = Callable[[], object]

_COLOR_CYCLE = ["#6ab0ff", "#f58f7c", "#9cdcfe", "#fadb5f", "#9ae6b4", "#d4b5ff"]


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


def collect_meshes(scene: object) -> List[Mesh]:
    """Flatten a build() result (Mesh, MeshGroup, or nested sequences) into meshes."""

    meshes: List[Mesh] = []

    def visit(item: object) -> None:
        if item is None:
            return
        if isinstance(item, Mesh):
            if not item.is_empty:
                meshes.append(item)
            return
        if isinstance(item, MeshGroup):
            for mesh in item.to_meshes():
                visit(mesh)
            return
        if isinstance(item, (list, tuple)):
            for value in item:
                visit(value)
            return
        raise PreviewBackendError(
            f"Model build() must return Mesh or MeshGroup objects (or a list of them), got {type(item).__name__}."
        )

    visit(scene)
    if not meshes:
        raise PreviewBackendError("Scene did not produce any non-empty meshes.")
    return meshes


class PyVistaPreviewer:
    """Render scenes using PyVista and provide optional hot reload support."""

    def __init__(self, console: Console, unit_settings: UnitSettings | None = None):
        self.console = console
        self._pv = None
        self._unit_settings = unit_settings or get_unit_settings()

    @property
    def unit_name(self) -> str:
        return self._unit_settings.name

    @property
    def unit_label(self) -> str:
        return self._unit_settings.label

    def show(
        self,
        scene_factory: SceneFactory,
        initial_scene: object,
        model_path: Path,
        watch_files: bool,
        target_fps: int,
        screenshot_path: Path | None = None,
        show_edges: bool = False,
    ) -> None:
        pv = self._ensure_backend()
        plotter = pv.Plotter(window_size=(1280, 800))
        plotter.set_background("#090c10", top="#1b2333")
        if initial_scene is not None:
            self._apply_scene(plotter, collect_meshes(initial_scene), show_edges=show_edges, align_camera=True)

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="Partsmith Preview", auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            return

        if not watch_files:
            plotter.show(title="Partsmith Preview")
            plotter.close()
            return

        reload_queue: queue.Queue[float] = queue.Queue()
        stop_event = threading.Event()
        watcher_thread = threading.Thread(
            target=self._watch_model_file,
            args=(model_path, reload_queue, stop_event),
            name="partsmith-watch",
            daemon=True,
        )
        watcher_thread.start()

        def process_queue() -> None:
            reload_requested = False
            while True:
                try:
                    reload_queue.get_nowait()
                    reload_requested = True
                except queue.Empty:
                    break
            if not reload_requested:
                return

            self.console.print(f"[yellow]Reloading {model_path}…[/yellow]")
            try:
                meshes = collect_meshes(scene_factory())
            except Exception as exc:  # surfaced via console, the window stays open
                self.console.print(Panel.fit(str(exc), title="Reload failed", style="red"))
                return
            self._apply_scene(plotter, meshes, show_edges=show_edges, align_camera=False)
            plotter.render()
            self.console.print(f"[green]Reloaded {model_path}[/green]")

        interval_seconds = max(1.0 / max(target_fps, 1), 0.05)
        callback_id = plotter.add_callback(process_queue, interval=int(interval_seconds * 1000))
        try:
            plotter.show(title="Partsmith Preview", auto_close=False)
        finally:
            stop_event.set()
            remove_callback = getattr(plotter, "remove_callback", None)
            if callable(remove_callback) and callback_id is not None:
                remove_callback(callback_id)
            plotter.close()

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for previewing. Install partsmith with `pip install -e .`."
                ) from exc
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def _apply_scene(self, plotter, meshes: Iterable[Mesh], show_edges: bool, align_camera: bool = False) -> None:
        meshes = list(meshes)
        plotter.clear()
        label = self._unit_settings.label
        plotter.show_bounds(
            grid="front",
            color="#5a677d",
            xlabel=f"X ({label})",
            ylabel=f"Y ({label})",
            zlabel=f"Z ({label})",
        )
        plotter.add_axes(interactive=True)

        for index, mesh in enumerate(meshes):
            if mesh.color is not None:
                color = mesh.color[:3]
                opacity = mesh.color[3]
            else:
                color = _COLOR_CYCLE[index % len(_COLOR_CYCLE)]
                opacity = 1.0
            plotter.add_mesh(
                mesh_to_pyvista(mesh),
                name=f"mesh-{index}",
                show_edges=show_edges,
                color=color,
                opacity=opacity,
                smooth_shading=True,
                specular=0.2,
            )

        if align_camera:
            self._reset_camera(plotter, meshes)

    def _reset_camera(self, plotter, meshes: List[Mesh]) -> None:
        bounds = [math.inf, -math.inf, math.inf, -math.inf, math.inf, -math.inf]
        for mesh in meshes:
            mesh_bounds = mesh.bounds
            for axis in range(3):
                bounds[2 * axis] = min(bounds[2 * axis], mesh_bounds[2 * axis])
                bounds[2 * axis + 1] = max(bounds[2 * axis + 1], mesh_bounds[2 * axis + 1])
        if not meshes:
            return

        center = [(bounds[2 * axis] + bounds[2 * axis + 1]) / 2.0 for axis in range(3)]
        diag = math.sqrt(sum((bounds[2 * axis + 1] - bounds[2 * axis]) ** 2 for axis in range(3)))
        distance = max(diag, 1.0) * 1.2
        camera_pos = (center[0], center[1] + distance, center[2])
        plotter.camera_position = [camera_pos, tuple(center), (0.0, 0.0, 1.0)]

    def _watch_model_file(
        self,
        model_path: Path,
        reload_queue: "queue.Queue[float]",
        stop_event: threading.Event,
    ) -> None:
        resolved_model = model_path.resolve()
        watch_root = resolved_model if resolved_model.is_dir() else resolved_model.parent

        for changes in watch(str(watch_root), stop_event=stop_event, debounce=300):
            if stop_event.is_set():
                return
            for change, changed_path in changes:
                if Change.deleted == change and Path(changed_path) == resolved_model:
                    reload_queue.put_nowait(0.0)
                    break
                if Path(changed_path).resolve() == resolved_model:
                    reload_queue.put_nowait(0.0)
                    break
