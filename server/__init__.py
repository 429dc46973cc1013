"""FastAPI shell around the search tool."""
