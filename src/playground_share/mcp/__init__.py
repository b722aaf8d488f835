"""MCP stdio server exposing the share-state engine as tools."""
