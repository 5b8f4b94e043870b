"""Application workflows orchestrating domain rules, rendering and the API client."""
