"""
Main application module for the fractal viewer.

Contains the FractalViewerApp class which handles:
- Window setup and main loop
- Translating pygame input into viewport events
- Rendering and display

Rendering is synchronous: an event that changes the viewport triggers a
full render, and the window only ever shows complete frames.
"""

import sys

import pygame

from .compute import warmup_jit
from .config import ConfigError, config_from_args
from .controller import BUTTON_LEFT, BUTTON_RIGHT, ClickEvent, ResetEvent, ViewportController
from .renderer import FractalRenderer, as_image

VERBOSE = False

CAPTION = "Fractal Viewer - Left-click to zoom in, right-click to zoom out"

INSTRUCTIONS = """
Instructions:

 * Left-click to zoom in.
 * Right-click to zoom out.
 * Press R to reset the view.
 * Press C to print coordinates (to this console).
 * Press the Q key or the Escape key to quit.
"""


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


def translate_event(event):
    """
    Map a pygame event to a viewport event.

    Returns:
        ClickEvent, ResetEvent, or None when the event doesn't move the view
    """
    if event.type == pygame.MOUSEBUTTONUP and event.button in (BUTTON_LEFT, BUTTON_RIGHT):
        x, y = event.pos
        return ClickEvent(x, y, event.button)
    if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
        return ResetEvent()
    return None


class FractalViewerApp:
    """
    Main application class for the fractal viewer.

    Handles the pygame window and event loop, and hands frames from the
    renderer to the display.
    """

    def __init__(self, config):
        """
        Initialize the application.

        Args:
            config: A validated ViewerConfig
        """
        self.config = config
        self.width = config.width
        self.height = config.height

        self.controller = ViewportController(
            config.initial_viewport(), config.zoom_factor, config.zoom_limits())
        self.renderer = FractalRenderer(
            config.max_iterations, config.bailout_radius,
            config.make_palette(), config.cycle_detection)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.current_surface = None

        self.needs_render = True
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit(self.renderer.palette.colormap, self.renderer.palette.interior)
        pygame.display.set_caption(CAPTION)

        self.running = True
        while self.running:
            self._handle_events()
            if self.needs_render:
                self._render()
            self._draw()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.DOUBLEBUF | pygame.RESIZABLE
        )
        self.clock = pygame.time.Clock()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key in (pygame.K_ESCAPE, pygame.K_q):
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_c:
                print(self.controller.describe(self.width, self.height, pygame.mouse.get_pos()))
            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)
            else:
                view_event = translate_event(event)
                if view_event is not None and self.controller.handle(view_event, self.width, self.height):
                    log(f"{view_event} -> {self.controller.viewport}")
                    self.needs_render = True

    def _handle_resize(self, width, height):
        if width <= 0 or height <= 0 or (width, height) == (self.width, self.height):
            return
        self.width, self.height = width, height
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.DOUBLEBUF | pygame.RESIZABLE
        )
        self.needs_render = True

    def _render(self):
        """Render the current viewport and build the display surface."""
        pygame.display.set_caption("Computing...")
        frame = self.renderer.render(self.controller.viewport, self.width, self.height)
        self.current_surface = pygame.surfarray.make_surface(
            as_image(frame, self.width, self.height).swapaxes(0, 1)
        )
        self.needs_render = False
        pygame.display.set_caption(CAPTION)
        print(f"Zoom level {self.controller.viewport.zoom_level}:  "
              f"Elapsed time:  {self.renderer.last_render_seconds:.6f} sec.")

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))
        if self.current_surface is not None:
            self.screen.blit(self.current_surface, (0, 0))
        pygame.display.flip()


def run(config):
    """Run the viewer with a validated ViewerConfig."""
    app = FractalViewerApp(config)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()


def main(argv=None):
    """Command-line entry point. Returns the process exit status."""
    global VERBOSE

    try:
        config, args = config_from_args(argv)
    except ConfigError as e:
        print(f"Error:  {e}", file=sys.stderr)
        return 1

    VERBOSE = args.verbose
    log(f"Configuration: {config}")

    print()
    print("---=== A Mandelbrot and Julia set viewer ===---")
    print(INSTRUCTIONS)

    run(config)
    return 0
