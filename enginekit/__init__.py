"""3D maths primitives, culling frustums and typed property values."""

__version__ = "0.1.0"