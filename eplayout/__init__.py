"""Media player output layer: PES headers, AAC helpers, output dispatch and subtitles."""

__version__ = "0.1.0"

__all__ = ["aac", "bits", "metadata", "output", "pes", "subtitle", "writer"]