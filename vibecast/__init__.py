"""Terminal internet radio player: station directory client, mpv control and a curses interface."""

__version__ = "0.1.3"