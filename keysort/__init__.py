"""KeySort: step through a folder of images and file each one with a single keystroke."""

__version__ = "0.3.0"
