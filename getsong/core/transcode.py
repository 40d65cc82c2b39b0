from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from .errors import TranscodeError
from .models import BinaryLocation

logger = logging.getLogger(__name__)


def convert_to_mp3(binary: BinaryLocation, input_path: str) -> str:
    output_path = str(Path(input_path).with_suffix(".mp3"))
    cmd = [binary.path, "-i", input_path, "-y", output_path]
    logger.debug("running %s", " ".join(cmd))

    try:
        subprocess.run(cmd, check=True, capture_output=True, text=True)
    except FileNotFoundError as exc:
        raise TranscodeError("TRANSCODE_BINARY_MISSING", f"{binary.path} is not runnable") from exc
    except subprocess.CalledProcessError as exc:
        raise TranscodeError("TRANSCODE_FAILED", (exc.stderr or exc.stdout or str(exc)).strip()) from exc

    os.remove(input_path)
    return output_path
