"""A minimal HTTP/1.1 client built directly on TCP sockets."""

__version__ = "0.1.0"
__all__ = ["client", "connection", "request", "response"]