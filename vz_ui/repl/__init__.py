"""Command registry, dispatcher and session loop."""
