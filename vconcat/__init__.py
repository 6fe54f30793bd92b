"""vconcat — dashcam clip consolidation.

WHY: Dashcams record short clips, each with an SRT file holding the
date/time and speed overlay. Watching a trip means juggling dozens of
files. vconcat turns a folder of clips into one small video with a
readable, styled subtitle track.

HOW: Two stages. The core package converts each SRT into an ASS
subtitle (timestamps re-encoded, date stamps spelled out, speed tokens
removed). The media package drives ffmpeg to rescale each clip, mux its
subtitle track, and join the clips.

RULES:
- The subtitle core never touches ffmpeg or ambient process state
- All run settings travel in a single RunOptions value
"""

__version__ = "0.3.0"
