"""Concrete cache and storage backends for the moviecache layer."""
