"""Client for the Model Context Protocol over pluggable JSON-RPC transports."""

__version__ = "0.1.0"
__all__ = ["client", "protocol"]