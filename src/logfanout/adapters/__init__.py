"""Adapters – concrete storage backends."""
