"""Perceptual image hashing (average, difference and DCT), hash comparison and image loading."""

__version__ = "0.1.0"