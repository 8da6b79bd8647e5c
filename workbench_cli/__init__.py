"""Command line surface for inspecting recents and routing open requests."""
