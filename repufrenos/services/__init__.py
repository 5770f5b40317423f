"""Storefront and admin services."""
