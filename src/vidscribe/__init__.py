"""vidscribe: AI subtitles and action transcripts for video files."""

__version__ = "0.1.0"
