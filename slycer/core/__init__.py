"""
Core application engine for running external tools and splitting audio.

The `ProcessRunner` drives a child process while two `OutputTailer` threads
drain its output streams, turning yt-dlp progress lines into display updates.
The `SplitSession` sits on top as the session coordinator, delegating the
per-chapter cuts to the `ChapterSplitter`.
"""
