"""Show an image file in a window.

Usage:
    python scripts/show_image.py path/to/image.jpg

The window closes on any key or after IMAGE_WAIT_MS.
"""
import sys
from facecam.cli import image_viewer

if __name__ == '__main__':
    sys.exit(image_viewer())
