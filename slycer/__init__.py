"""
slycer: downloads audio with yt-dlp and splits it into one file per chapter.
"""

__version__ = "0.3.0"
