"""
Exception types raised by the capture, detection and display layers.
"""


class FaceCamError(RuntimeError):
    """Base class for every failure raised by facecam."""


class StartupFailure(FaceCamError):
    """Camera, cascade model or image could not be opened; nothing was run."""


class CollaboratorOperationFailure(FaceCamError):
    """An OpenCV capture, detection, drawing or display call failed mid-session."""
