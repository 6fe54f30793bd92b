"""ffmpeg collaborators and media file naming.

WHY: Rescaling, muxing and joining video is delegated to ffmpeg. This
package holds the thin layer that builds those commands and names the
files they produce, separate from the subtitle core.
"""
