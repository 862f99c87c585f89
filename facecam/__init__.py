"""OpenCV webcam, face-detection and image-viewer example programs."""
