"""Mirror HLS renditions from a remote origin into a local directory."""

__version__ = "0.1.0"
