"""Application layer: configuration, controller and HTTP/WebSocket surface."""
