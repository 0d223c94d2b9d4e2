"""GUI-agnostic grayscale conversion core: colour maths, tree passes and services."""
