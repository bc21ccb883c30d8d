"""Main configuration package for the claimdesk Django project."""
