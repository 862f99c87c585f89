"""Run Haar-cascade face detection on the default webcam.

Usage:
    CAMERA_INDEX=1 python scripts/face_detection.py

Press 'g' to toggle grayscale mode, any other key to quit.
"""
import sys
from facecam.cli import face_detection

if __name__ == '__main__':
    sys.exit(face_detection())
