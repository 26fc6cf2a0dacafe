"""vtt2srt — batch WebVTT to SubRip subtitle converter."""

__version__ = "0.1.0"
