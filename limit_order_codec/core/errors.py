"""
Codec errors.

Every validation failure in the encoders is raised synchronously, before any
output is built, as an InvalidArgument.
"""


class InvalidArgument(ValueError):
    """Input violates a bit-width, length-field or format constraint."""
