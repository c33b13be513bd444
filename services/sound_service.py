# -*- coding: utf-8 -*-

import logging
import subprocess
import sys

logger = logging.getLogger(__name__)

MAC_COMPLETION_SOUND = "/System/Library/Sounds/Glass.aiff"


class SoundPlayer:
    """
    Fire-and-forget completion chime. Only macOS has the player we rely on;
    everywhere else this is a no-op.
    """

    def __init__(self, platform: str = sys.platform):
        self.platform = platform

    @property
    def supported(self) -> bool:
        return self.platform == "darwin"

    def play_completion(self) -> None:
        if not self.supported:
            logger.debug(f"Completion sound not supported on {self.platform}")
            return
        try:
            subprocess.Popen(
                ["afplay", MAC_COMPLETION_SOUND],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            # sound is optional, never block the timer on it
            logger.warning(f"Could not play completion sound: {e}")
