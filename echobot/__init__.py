"""EchoBot chat service."""
