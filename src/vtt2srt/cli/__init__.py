"""vtt2srt command line interface."""
