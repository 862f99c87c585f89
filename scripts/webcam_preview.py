"""Show the default webcam with a tips overlay and the info panel.

Usage:
    python scripts/webcam_preview.py

Press 'g' to toggle grayscale mode, any other key to quit.
"""
import sys
from facecam.cli import webcam_preview

if __name__ == '__main__':
    sys.exit(webcam_preview())
