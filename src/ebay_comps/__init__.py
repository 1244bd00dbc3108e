"""Sold-price comparables for eBay search queries."""

__version__ = "0.1.0"
