"""hookwright - git hook execution substrate."""

__version__ = "0.4.0"
