"""Shared CLI scaffolding: argument framework, errors, output, pipelines and config IO."""
