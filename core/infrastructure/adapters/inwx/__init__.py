"""INWX DomRobot adapter: JSON-RPC client and tool catalog.

Import concrete modules directly; this package stays import-light so the
tool catalog can be loaded without opening network sessions.
"""

__all__ = []
