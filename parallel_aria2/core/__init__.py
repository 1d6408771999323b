"""
Core application engine for orchestrating a mirror run.

The `MirrorSession` drives the pipeline: discovery, relative path mapping,
manifest generation through the `ManifestBuilder`, and the final transfer.
"""
