"""
moderngl-window host for the camera demos.

Wires window events into an InputCollector, runs the active camera
controller once per fixed tick, and draws the demo scene from the
resulting pose.

Controls:
- Left click: lock cursor (camera input enabled)
- Escape: release cursor
- W/S/A/D, Space, Left Shift: move (shooter)
- Mouse: look (shooter) / orbit (editor)
- R: reset camera
"""

from __future__ import annotations
import argparse
import logging
from typing import List, Optional, Sequence, Tuple

import moderngl_window as mglw

from .cameras import make_controller
from .config import AppConfig, CAMERA_KINDS, load_config
from .core.frame import FixedTimestep, FrameState
from .core.input import CursorGrab, InputCollector, resolve_key_bindings
from .core.log import setup_logging
from .render.renderer import SceneRenderer
from .scene.demo import demo_scene

logger = logging.getLogger(__name__)

LEFT_BUTTON = 1


class CrafthouseApp(mglw.WindowConfig):
    """Main application window."""

    gl_version = (3, 3)
    title = "crafthouse"
    window_size = (1280, 720)
    resizable = True
    resource_dir = "."

    # Set by main() before the window is created
    app_config: Optional[AppConfig] = None

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.app_config is None:
            self.app_config = AppConfig()
        config = self.app_config

        self.scene = demo_scene(translucent=(config.camera == "editor"))
        self.renderer = SceneRenderer(self.ctx, fov_y_deg=config.fov_y_deg)
        self.controller = make_controller(config.camera, config)
        self.stepper = FixedTimestep(config.time_step, config.max_steps_per_frame)

        keys = self.wnd.keys
        self.grab = CursorGrab()
        self.input = InputCollector(resolve_key_bindings(keys, config.key_bindings), self.grab)
        self.input.resize(*self.wnd.size)

        # Escape releases the cursor instead of closing the window
        self.wnd.exit_key = None

        self.frame = FrameState(frame_id=0, dt=0.0, t=0.0)
        logger.info("Started %s camera (tick %.4fs)", config.camera, config.time_step)

    def on_render(self, time: float, frame_time: float):
        """Main loop: fixed camera ticks, then draw."""
        self.frame = FrameState(frame_id=self.frame.frame_id + 1, dt=frame_time, t=time)

        self.stepper.run(frame_time, self.input, self.controller)

        w, h = self.wnd.buffer_size
        self.renderer.render(self.scene, self.controller.pose, w, h)

        if self.frame.frame_id % 600 == 0:
            logger.debug("frame=%d fps=%.1f camera=%s", self.frame.frame_id,
                         self.frame.fps, self.controller.pose.position)

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def _set_locked(self, locked: bool):
        changed = self.grab.lock() if locked else self.grab.release()
        if not changed:
            return
        self.wnd.mouse_exclusivity = locked
        self.wnd.cursor = not locked
        if not locked:
            self.input.release_all()

    def on_key_event(self, key, action, modifiers):
        keys = self.wnd.keys
        if action == keys.ACTION_PRESS:
            if key == keys.ESCAPE:
                self._set_locked(False)
            elif key == keys.R:
                self.controller.reset()
                logger.info("Camera reset")
            else:
                self.input.key_down(key)
        elif action == keys.ACTION_RELEASE:
            self.input.key_up(key)

    def on_mouse_press_event(self, x, y, button):
        if button == LEFT_BUTTON:
            self._set_locked(True)

    def on_mouse_position_event(self, x, y, dx, dy):
        if self.grab.locked:
            self.input.mouse_motion(dx, dy)

    def on_mouse_drag_event(self, x, y, dx, dy):
        if self.grab.locked:
            self.input.mouse_motion(dx, dy)

    def on_resize(self, width: int, height: int):
        if width > 0 and height > 0:
            self.input.resize(width, height)

    def on_close(self):
        self.renderer.release()


# =============================================================================
# Entry Point
# =============================================================================

def parse_args(argv: Optional[Sequence[str]] = None,
               camera: Optional[str] = None) -> Tuple[AppConfig, List[str]]:
    """
    Split our options from moderngl-window's and build the AppConfig.

    `camera` sets the default scene for example launchers; --camera and
    CRAFTHOUSE_CAMERA still take precedence.
    """
    parser = argparse.ArgumentParser(prog="crafthouse", description="Camera control demos")
    parser.add_argument("--camera", choices=CAMERA_KINDS, default=None,
                        help="Camera scheme: shooter (free-fly) or editor (orbit)")
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to JSON config")
    parser.add_argument("--log-level", type=str, default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args, rest = parser.parse_known_args(argv)

    config = load_config(args.config, default_camera=camera)
    if args.camera:
        config.camera = args.camera
    if args.log_level:
        config.log_level = args.log_level
    return config.validate(), rest


def main(argv: Optional[Sequence[str]] = None, camera: Optional[str] = None) -> None:
    config, rest = parse_args(argv, camera)
    setup_logging(config.log_level)

    CrafthouseApp.app_config = config
    CrafthouseApp.title = f"{config.title} - {config.camera}"
    CrafthouseApp.window_size = tuple(config.window_size)
    mglw.run_window_config(CrafthouseApp, args=rest)


if __name__ == "__main__":
    main()
