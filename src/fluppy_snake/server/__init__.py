"""HTTP and WebSocket adapter for Fluppy Snake sessions."""
