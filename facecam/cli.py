"""
Entry points for the example programs.

Every program returns 0, including after an abnormal close; the diagnostics
go to standard output.
"""
from __future__ import annotations
import argparse
import logging
from typing import Optional, Sequence

import cv2

from facecam.config import Settings
from facecam.errors import StartupFailure, CollaboratorOperationFailure
from facecam.live import build_webcam_loop
from facecam.viewer import show_image

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def hello(argv: Optional[Sequence[str]] = None) -> int:
    argparse.ArgumentParser(description="Print a greeting and the OpenCV version.").parse_args(argv)
    print("OpenCV Hello world:)")
    print(f"OpenCV version: {cv2.__version__}")
    return 0


def image_viewer(argv: Optional[Sequence[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Show an image file in a window.")
    p.add_argument("image", nargs="?", help="Path to the image file")
    args = p.parse_args(argv)

    if not args.image:
        print("\nPlease provide an image file name:)\n")
        return 0

    settings = Settings()
    configure_logging(settings)
    try:
        show_image(args.image, settings)
    except StartupFailure:
        logger.debug(f"[cli] image load failed path={args.image}", exc_info=True)
        print(f"\nImage load failed: {args.image}\n")
    except CollaboratorOperationFailure as e:
        logger.debug("[cli] image window failed", exc_info=True)
        print(f"Close image window abnormally: {e}")
    return 0


def _run_webcam(argv: Optional[Sequence[str]], description: str, with_detector: bool) -> int:
    argparse.ArgumentParser(description=description).parse_args(argv)
    settings = Settings()
    configure_logging(settings)

    loop = build_webcam_loop(settings, with_detector=with_detector)
    close_capture_ok = True
    try:
        loop.run()
    except Exception as e:
        logger.debug("[cli] loop terminated with an error", exc_info=True)
        print(f"Close video capture abnormally: {e}")
        close_capture_ok = False

    for step, err in loop.cleanup_errors:
        if step == "release":
            print(f"Close video capture abnormally: {err}")
        else:
            print(f"Close all windows abnormally: {err}")

    if close_capture_ok and not loop.cleanup_errors:
        print("Program exit normally:)")
    # TODO: map StartupFailure / CollaboratorOperationFailure to distinct exit codes once callers need them
    return 0


def webcam_preview(argv: Optional[Sequence[str]] = None) -> int:
    return _run_webcam(argv, "Show the webcam with a tips overlay.", with_detector=False)


def face_detection(argv: Optional[Sequence[str]] = None) -> int:
    return _run_webcam(argv, "Show the webcam with Haar-cascade face detection.", with_detector=True)
