"""Beam-spot geometry and optics parameters held by the vertex smearing model."""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
