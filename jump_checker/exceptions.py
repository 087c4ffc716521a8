# jump_checker/exceptions.py

class JumpCheckError(Exception):
    """Base exception for jump reachability errors."""
    pass

class DegenerateAccelerationError(JumpCheckError):
    """Raised when the acceleration vector has zero magnitude."""
    pass

class InvalidGeometryError(JumpCheckError):
    """Raised when an edge is requested from a polygon that has none."""
    pass

class MissingAnchorError(JumpCheckError):
    """Raised when a graph node references an unknown polygon or edge."""
    pass

class InvalidParamsError(JumpCheckError):
    """Raised when jump parameters are out of range."""
    pass
