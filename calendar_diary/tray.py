"""
System tray icon for the diary window
"""

import logging
from threading import Thread

import pystray
from PIL import Image, ImageDraw

logger = logging.getLogger(__name__)


class TrayIcon:
    """System tray icon manager

    pystray runs its own loop on a daemon thread, so every menu callback is
    handed to the tk thread with ``window.after``.
    """

    def __init__(self, window, on_toggle, on_show, on_quit):
        self.window = window
        self._on_toggle = on_toggle
        self._on_show = on_show
        self._on_quit = on_quit
        self.icon = None
        self._thread = None
        self._create_icon()

    @staticmethod
    def create_icon_image(size=64):
        """Draw a small calendar page"""
        image = Image.new('RGBA', (size, size), (0, 0, 0, 0))
        draw = ImageDraw.Draw(image)
        margin = size // 10
        draw.rounded_rectangle(
            [margin, margin * 2, size - margin, size - margin],
            radius=size // 10,
            fill=(255, 247, 235),
            outline=(107, 77, 55),
            width=max(1, size // 20),
        )
        draw.rectangle(
            [margin, margin * 2, size - margin, margin * 4],
            fill=(176, 84, 44),
        )
        cell = (size - margin * 4) // 3
        draw.ellipse(
            [margin * 2 + cell, margin * 5, margin * 2 + cell * 2, margin * 5 + cell],
            fill=(143, 214, 148),
        )
        return image

    def _create_icon(self):
        """Create and configure system tray icon"""
        menu = pystray.Menu(
            # Hidden default item: the backend's icon activation (click on win32)
            pystray.MenuItem(
                'Toggle Window',
                self._toggle_window,
                default=True,
                visible=False
            ),
            pystray.MenuItem(
                'Show',
                self._show_window
            ),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem(
                'Quit',
                self._quit
            )
        )

        self.icon = pystray.Icon(
            'calendar_diary',
            self.create_icon_image(),
            'Calendar Diary',
            menu
        )

    def _toggle_window(self, icon, item):
        self.window.after(0, self._on_toggle)

    def _show_window(self, icon, item):
        self.window.after(0, self._on_show)

    def _quit(self, icon, item):
        self.window.after(0, self._on_quit)

    @property
    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def run(self):
        """Run icon in background thread"""
        self._thread = Thread(target=self._run_icon, name='calendar-diary-tray', daemon=True)
        self._thread.start()

    def _run_icon(self):
        try:
            self.icon.run()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Tray icon stopped: %s", exc)

    def stop(self):
        """Stop icon"""
        if self.icon:
            self.icon.stop()
