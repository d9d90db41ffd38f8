"""Application layer - permission guard, toolset building and interfaces."""
