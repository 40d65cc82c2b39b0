from .bootstrap import get_ffmpeg_binary
from .fetcher import download_audio, find_video_id
from .orchestrator import get_song
from .settings import GetSongConfig, load_config

__all__ = ["GetSongConfig", "download_audio", "find_video_id", "get_ffmpeg_binary", "get_song", "load_config"]
