"""Request and response DTOs."""
