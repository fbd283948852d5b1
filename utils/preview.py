"""On-screen preview of decoded frames."""
from abc import ABC, abstractmethod

import cv2
import numpy as np

from config import PREVIEW_WAIT_MS, QUIT_KEY


class PreviewSink(ABC):
    """Where decoded frames are shown while converting."""

    @abstractmethod
    def show(self, name: str, image: np.ndarray) -> None:
        """Show an image in the window called ``name``."""

    @abstractmethod
    def poll_quit(self) -> bool:
        """Return True when the user asked to stop the conversion."""

    def close(self) -> None:
        """Release any windows."""


class NullPreview(PreviewSink):
    """Headless preview: shows nothing, never quits."""

    def show(self, name: str, image: np.ndarray) -> None:
        pass

    def poll_quit(self) -> bool:
        return False


class OpenCVPreview(PreviewSink):
    """Preview windows with cv2.imshow; press ``q`` to stop."""

    def __init__(self, quit_key: str = QUIT_KEY, wait_ms: int = PREVIEW_WAIT_MS):
        self.quit_key = quit_key
        self.wait_ms = wait_ms

    def show(self, name: str, image: np.ndarray) -> None:
        cv2.imshow(name, image)

    def poll_quit(self) -> bool:
        key = cv2.waitKey(self.wait_ms)
        return key != -1 and (key & 0xFF) == ord(self.quit_key)

    def close(self) -> None:
        cv2.destroyAllWindows()
