"""Print a greeting and the installed OpenCV version."""
import sys
from facecam.cli import hello

if __name__ == '__main__':
    sys.exit(hello())
