"""Chess Royale — a minimal-but-correct chess rules core and game loop."""
