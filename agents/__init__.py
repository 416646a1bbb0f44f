"""Agents module for the batch image generator."""

from .image_generator import generate_and_save_images, BatchResult

__all__ = ["generate_and_save_images", "BatchResult"]
