"""Core tree model, search algorithms, layout, playback and oracle."""
