"""Consumer-side viewer module."""

from .client import StreamViewer
from .session import IPresenter, LoggingPresenter, PresentationSession

__all__ = ["IPresenter", "LoggingPresenter", "PresentationSession", "StreamViewer"]
